"""Contract with the AI analysis service.

The HTTP client for the generative-AI API lives with the caller. This module
prepares its input and normalizes its output so every client answers with the
same ``ResumeAnalysis`` shape.
"""

import json
import re
from typing import Any, Optional, Protocol

from resume_extractor.config import ExtractorConfig
from resume_extractor.exceptions import AnalysisServiceError, InsufficientContentError
from resume_extractor.logger import get_logger
from resume_extractor.models import ResumeAnalysis

logger = get_logger(__name__)

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)

PENDING = "Analysis pending"
DEFAULT_REWRITTEN_RESUME = "Enhanced resume will be generated"
DEFAULT_COVER_LETTER = "Cover letter will be generated"


class AnalysisClient(Protocol):
    """Anything that can score and rewrite a resume for a target role.

    ``analyze(resume_text, target_role)`` receives text already checked by
    ``ensure_analyzable`` and cut by ``prepare_analysis_text``, and returns a
    normalized ``ResumeAnalysis`` (see ``parse_analysis_response``). It may
    raise ``AnalysisServiceError``; any other exception is wrapped into one by
    the caller.
    """

    def analyze(self, resume_text: str, target_role: str) -> ResumeAnalysis:
        ...


def ensure_analyzable(text: str, config: Optional[ExtractorConfig] = None) -> str:
    """Reject resume text too short to be worth an AI call.

    Raises:
        InsufficientContentError: If the trimmed text is below
            ``config.min_analysis_length``
    """
    config = config or ExtractorConfig()
    length = len((text or "").strip())
    if length < config.min_analysis_length:
        raise InsufficientContentError(
            "The extracted text is too short. This might indicate that your file "
            "contains mostly images or is corrupted.",
            length,
        )
    return text


def prepare_analysis_text(text: str, config: Optional[ExtractorConfig] = None) -> str:
    """Cut resume text to the AI input limit, marking the cut."""
    config = config or ExtractorConfig()
    if len(text) <= config.max_analysis_chars:
        return text

    logger.info(
        "Truncating resume text for analysis",
        extra_data={"character_count": len(text), "limit": config.max_analysis_chars},
    )
    return text[: config.max_analysis_chars] + config.truncation_marker


def _score(value: Any) -> int:
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, score))


def _string_list(value: Any, default: list[str]) -> list[str]:
    if not isinstance(value, list):
        return list(default)
    items = []
    for item in value:
        # JSON null, booleans and nested objects are not list entries
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            continue
        text = str(item).strip()
        if text:
            items.append(text)
    return items


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def build_analysis(payload: dict) -> ResumeAnalysis:
    """Normalize a decoded AI answer, filling defaults for missing fields."""
    return ResumeAnalysis(
        score=_score(payload.get("score")),
        ats_score=_score(payload.get("atsScore")),
        strengths=_string_list(payload.get("strengths"), [PENDING]),
        improvements=_string_list(payload.get("improvements"), [PENDING]),
        keywords=_string_list(payload.get("keywords"), []),
        suggestions=_string_list(payload.get("suggestions"), [PENDING]),
        rewritten_resume=_text(payload.get("rewrittenResume"), DEFAULT_REWRITTEN_RESUME),
        cover_letter=_text(payload.get("coverLetter"), DEFAULT_COVER_LETTER),
    )


def parse_analysis_response(raw: str) -> ResumeAnalysis:
    """Decode the model's text answer into a ``ResumeAnalysis``.

    Markdown code fences around the JSON are tolerated.

    Raises:
        AnalysisServiceError: If the answer is not a JSON object
    """
    cleaned = _CODE_FENCE_RE.sub("", (raw or "").strip()).strip()
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error(
            "AI response is not valid JSON",
            extra_data={"response_length": len(cleaned), "error": str(exc)},
        )
        raise AnalysisServiceError("Invalid response format from AI service") from exc

    if not isinstance(payload, dict):
        raise AnalysisServiceError("Invalid response format from AI service")

    return build_analysis(payload)
