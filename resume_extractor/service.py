"""High-level API: extract a resume and hand it to the AI analysis service."""

from pathlib import Path
from typing import Optional, Union

from resume_extractor.analysis import AnalysisClient, ensure_analyzable, prepare_analysis_text
from resume_extractor.config import ExtractorConfig
from resume_extractor.exceptions import AnalysisServiceError, ResumeExtractorError, ValidationError
from resume_extractor.extractor import TextExtractor
from resume_extractor.logger import Timer, get_logger, request_context
from resume_extractor.models import AnalysisOutcome, ExtractionRequest, ExtractionResult, StoredUpload
from resume_extractor.uploads import processing_upload

logger = get_logger(__name__)

PASTED_RESUME_NAME = "Pasted Resume"


def _require_target_role(target_role: Optional[str]) -> str:
    if not (target_role or "").strip():
        raise ValidationError("Target role is required")
    return target_role.strip()


def extract_text(
    file_path: Union[str, Path],
    mime_type: Optional[str] = None,
    file_name: Optional[str] = None,
    config: Optional[ExtractorConfig] = None,
) -> ExtractionResult:
    """Extract text from a single file.

    Args:
        file_path: Path to a locally readable file
        mime_type: Declared MIME type (optional, the extension decides if missing)
        file_name: Original filename (defaults to the basename of file_path)
        config: Extraction settings (optional, uses defaults if not provided)

    Returns:
        ExtractionResult with the extracted text

    Examples:
        >>> result = extract_text("uploads/resume-123.pdf", "application/pdf", "resume.pdf")
        >>> print(result.text)
    """
    request = ExtractionRequest(
        file_path=file_path,
        declared_mime_type=mime_type or "",
        original_file_name=file_name or Path(file_path).name,
    )
    return TextExtractor(config=config).extract(request)


def _run_analysis(
    client: AnalysisClient, resume_text: str, target_role: str, config: ExtractorConfig
):
    prepared = prepare_analysis_text(resume_text, config)
    with Timer("ai_analysis") as timer:
        try:
            analysis = client.analyze(prepared, target_role)
        except AnalysisServiceError:
            raise
        except Exception as exc:
            logger.error(
                "AI analysis failed",
                extra_data={
                    "target_role": target_role,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise AnalysisServiceError("Failed to analyze resume with AI") from exc

    logger.info(
        "AI analysis completed",
        extra_data={
            "target_role": target_role,
            "score": analysis.score,
            "analysis_time_ms": timer.get_elapsed_ms(),
        },
    )
    return analysis


def analyze_resume_text(
    resume_text: str,
    target_role: str,
    client: AnalysisClient,
    config: Optional[ExtractorConfig] = None,
) -> AnalysisOutcome:
    """Analyze pasted resume text."""
    config = config or ExtractorConfig()
    with request_context():
        target_role = _require_target_role(target_role)
        ensure_analyzable(resume_text, config)
        analysis = _run_analysis(client, resume_text, target_role, config)
    return AnalysisOutcome(
        file_name=PASTED_RESUME_NAME,
        resume_text=resume_text,
        target_role=target_role,
        analysis=analysis,
    )


def analyze_resume_upload(
    upload: StoredUpload,
    target_role: str,
    client: AnalysisClient,
    extractor: Optional[TextExtractor] = None,
    config: Optional[ExtractorConfig] = None,
) -> AnalysisOutcome:
    """Extract an uploaded resume and analyze it.

    The temporary file is deleted whatever happens, including AI failures.

    Raises:
        ResumeExtractorError: Any extraction error, InsufficientContentError
            when the text is too short to analyze, AnalysisServiceError when
            the AI call fails, ValidationError when target_role is blank
    """
    config = config or (extractor.config if extractor else ExtractorConfig())
    extractor = extractor or TextExtractor(config=config)

    with request_context(), processing_upload(upload):
        target_role = _require_target_role(target_role)
        result = extractor.extract(upload.to_request())
        ensure_analyzable(result.text, config)
        analysis = _run_analysis(client, result.text, target_role, config)

    return AnalysisOutcome(
        file_name=upload.original_name,
        resume_text=result.text,
        target_role=target_role,
        analysis=analysis,
    )


def error_response(exc: BaseException) -> tuple[dict, int]:
    """Map an error to an HTTP body and status code.

    Unknown errors become a generic 500 without leaking their message.
    """
    if isinstance(exc, ResumeExtractorError):
        return exc.to_payload(), exc.status_code

    logger.error(
        "Unexpected error while processing resume",
        extra_data={"error_type": type(exc).__name__, "error": str(exc)},
    )
    return ResumeExtractorError().to_payload(), ResumeExtractorError.status_code
