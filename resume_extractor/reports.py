"""Downloadable documents and per-user statistics for analysis outcomes."""

import math
import re
from collections import Counter
from typing import Iterable

from resume_extractor.exceptions import ResumeExtractorError
from resume_extractor.models import AnalysisOutcome

RESUME = "resume"
COVER_LETTER = "coverletter"
REPORT = "report"

_FILENAME_TEMPLATES = {
    RESUME: "resume-{role}-enhanced.txt",
    COVER_LETTER: "cover-letter-{role}.txt",
    REPORT: "analysis-report-{role}.txt",
}

_WHITESPACE_RE = re.compile(r"\s+")
_SEPARATOR = "=" * 60
RECENT_LIMIT = 5


class ContentNotAvailableError(ResumeExtractorError):
    """Raised when a requested download has no content behind it."""

    kind = "not_found"
    status_code = 404

    @property
    def details(self) -> str:
        return str(self)


def download_filename(kind: str, target_role: str) -> str:
    """Attachment name for a download, whitespace in the role turned into ``-``.

    Raises:
        ValueError: If ``kind`` is not resume, coverletter or report
    """
    try:
        template = _FILENAME_TEMPLATES[kind]
    except KeyError:
        raise ValueError(f"Unknown download kind: {kind}") from None
    return template.format(role=_WHITESPACE_RE.sub("-", target_role or ""))


def _bullets(items, fallback: str) -> str:
    if not items:
        return fallback
    return "\n".join(f"• {item}" for item in items)


def render_report(outcome: AnalysisOutcome) -> str:
    """Plain-text analysis report with the rewritten resume and cover letter."""
    analysis = outcome.analysis
    lines = [
        "RESUME ANALYSIS REPORT",
        "======================",
        "",
        "ANALYSIS DETAILS",
        "----------------",
        f"Date: {outcome.created_at.strftime('%m/%d/%Y')}",
        f"Target Role: {outcome.target_role}",
        f"Overall Score: {analysis.score}/100",
        f"ATS Score: {analysis.ats_score or 'N/A'}/100",
        "",
        "STRENGTHS",
        "---------",
        _bullets(analysis.strengths, "No strengths identified"),
        "",
        "AREAS FOR IMPROVEMENT",
        "--------------------",
        _bullets(analysis.improvements, "No improvements identified"),
        "",
        "KEY KEYWORDS",
        "------------",
        ", ".join(analysis.keywords) or "No keywords identified",
        "",
        "RECOMMENDATIONS",
        "---------------",
        _bullets(analysis.suggestions, "No suggestions provided"),
        "",
        _SEPARATOR,
        "",
        "ENHANCED RESUME",
        "===============",
        analysis.rewritten_resume or "No enhanced resume available",
        "",
        _SEPARATOR,
        "",
        "COVER LETTER",
        "============",
        analysis.cover_letter or "No cover letter available",
    ]
    return "\n".join(lines) + "\n"


def render_download(outcome: AnalysisOutcome, kind: str) -> tuple[str, str]:
    """Return ``(filename, body)`` for one of the downloadable documents.

    Raises:
        ContentNotAvailableError: If the resume or cover letter is empty
        ValueError: If ``kind`` is unknown
    """
    filename = download_filename(kind, outcome.target_role)
    if kind == REPORT:
        return filename, render_report(outcome)

    if kind == RESUME:
        body, label = outcome.analysis.rewritten_resume, "rewritten resume"
    else:
        body, label = outcome.analysis.cover_letter, "cover letter"
    if not body:
        raise ContentNotAvailableError(f"No {label} available")
    return filename, body


def summarize_outcomes(outcomes: Iterable[AnalysisOutcome]) -> dict:
    """Totals, rounded average, best score and role counts for a user's analyses.

    ``recentAnalyses`` keeps the first five outcomes in the order given.
    """
    outcomes = list(outcomes)
    scores = [outcome.analysis.score for outcome in outcomes]
    total = len(outcomes)

    # half-up rounding, not banker's rounding
    average = math.floor(sum(scores) / total + 0.5) if total else 0

    return {
        "totalAnalyses": total,
        "averageScore": average,
        "bestScore": max(scores) if scores else 0,
        "roleDistribution": dict(Counter(outcome.target_role for outcome in outcomes)),
        "recentAnalyses": [
            {
                "fileName": outcome.file_name,
                "targetRole": outcome.target_role,
                "score": outcome.analysis.score,
                "createdAt": outcome.created_at.isoformat(),
            }
            for outcome in outcomes[:RECENT_LIMIT]
        ],
    }
