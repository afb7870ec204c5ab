"""Resume text extraction with multi-strategy PDF fallbacks."""

from resume_extractor.analysis import (
    AnalysisClient,
    build_analysis,
    ensure_analyzable,
    parse_analysis_response,
    prepare_analysis_text,
)
from resume_extractor.config import ExtractorConfig
from resume_extractor.detector import resolve_kind
from resume_extractor.exceptions import (
    AnalysisServiceError,
    DecodingError,
    DocumentExtractionError,
    ExtractionFailedError,
    InsufficientContentError,
    ResumeExtractorError,
    UnsupportedTypeError,
    ValidationError,
)
from resume_extractor.extractor import TextExtractor
from resume_extractor.logger import setup_logging
from resume_extractor.models import (
    AnalysisOutcome,
    DocumentKind,
    ExtractionRequest,
    ExtractionResult,
    ResumeAnalysis,
    StoredUpload,
)
from resume_extractor.reports import (
    ContentNotAvailableError,
    download_filename,
    render_download,
    render_report,
    summarize_outcomes,
)
from resume_extractor.service import (
    analyze_resume_text,
    analyze_resume_upload,
    error_response,
    extract_text,
)
from resume_extractor.strategies import PDF_STRATEGIES
from resume_extractor.uploads import (
    HOURLY_SWEEP_AGE,
    QUICK_SWEEP_AGE,
    check_upload,
    cleanup_upload,
    processing_upload,
    store_upload,
    sweep_stale_uploads,
)
from resume_extractor.validator import FileValidator

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "extract_text",
    "analyze_resume_text",
    "analyze_resume_upload",
    "error_response",
    # Core classes
    "TextExtractor",
    "FileValidator",
    "PDF_STRATEGIES",
    "resolve_kind",
    # Downloads and statistics
    "download_filename",
    "render_download",
    "render_report",
    "summarize_outcomes",
    # Uploads
    "check_upload",
    "store_upload",
    "cleanup_upload",
    "processing_upload",
    "sweep_stale_uploads",
    "QUICK_SWEEP_AGE",
    "HOURLY_SWEEP_AGE",
    # AI analysis contract
    "AnalysisClient",
    "build_analysis",
    "ensure_analyzable",
    "parse_analysis_response",
    "prepare_analysis_text",
    # Data models
    "AnalysisOutcome",
    "DocumentKind",
    "ExtractionRequest",
    "ExtractionResult",
    "ResumeAnalysis",
    "StoredUpload",
    # Configuration
    "ExtractorConfig",
    "setup_logging",
    # Exceptions
    "ResumeExtractorError",
    "ValidationError",
    "UnsupportedTypeError",
    "DecodingError",
    "DocumentExtractionError",
    "ExtractionFailedError",
    "InsufficientContentError",
    "AnalysisServiceError",
    "ContentNotAvailableError",
]
