"""Configuration for resume text extraction."""

import os
from dataclasses import dataclass, field
from typing import Optional

MIB = 1024 * 1024


@dataclass(frozen=True)
class ExtractorConfig:
    """Settings shared by the validator, the extraction pipeline and the
    upload helpers.

    The pipeline never reads the environment itself; build one of these at
    the application edge (``ExtractorConfig.from_env()``) and pass it in.

    Examples:
        >>> # Defaults (10 MiB uploads, pdftotext on PATH)
        >>> config = ExtractorConfig()

        >>> # Tighter limits for a small instance
        >>> config = ExtractorConfig(max_file_size_bytes=2 * MIB, pdftotext_timeout=10)
    """

    max_file_size_bytes: int = 10 * MIB
    """Largest accepted upload. Files above this fail validation."""

    min_text_length: int = 10
    """Minimum trimmed length of extracted text for a successful extraction."""

    min_analysis_length: int = 50
    """Minimum trimmed length of resume text before it is sent for AI analysis."""

    pdftotext_cmd: str = "pdftotext"
    """External PDF-to-text utility. Looked up on PATH; absence is not fatal."""

    pdftotext_timeout: float = 30.0
    """Seconds before the external PDF utility is abandoned."""

    soffice_cmd: str = "soffice"
    """LibreOffice binary used to convert legacy .doc files."""

    conversion_timeout: float = 60.0
    """Seconds before a LibreOffice conversion is abandoned."""

    max_analysis_chars: int = 15_000
    """Resume text longer than this is cut before the AI call."""

    truncation_marker: str = "...[truncated]"
    """Appended to resume text that was cut to ``max_analysis_chars``."""

    upload_dir: str = "uploads"
    """Directory where the upload receiver stores temporary files."""

    allowed_extensions: frozenset = field(
        default_factory=lambda: frozenset({".pdf", ".doc", ".docx", ".txt"})
    )
    """File extensions accepted by the upload receiver."""

    @classmethod
    def from_env(cls, prefix: str = "RESUME_") -> "ExtractorConfig":
        """Build a config from ``RESUME_*`` environment variables.

        Unset variables keep their defaults.
        """
        defaults = cls()

        def _get(name: str, cast, default):
            raw: Optional[str] = os.environ.get(prefix + name)
            if raw is None or raw.strip() == "":
                return default
            return cast(raw.strip())

        return cls(
            max_file_size_bytes=_get("MAX_FILE_SIZE_BYTES", int, defaults.max_file_size_bytes),
            min_text_length=_get("MIN_TEXT_LENGTH", int, defaults.min_text_length),
            min_analysis_length=_get("MIN_ANALYSIS_LENGTH", int, defaults.min_analysis_length),
            pdftotext_cmd=_get("PDFTOTEXT_CMD", str, defaults.pdftotext_cmd),
            pdftotext_timeout=_get("PDFTOTEXT_TIMEOUT", float, defaults.pdftotext_timeout),
            soffice_cmd=_get("SOFFICE_CMD", str, defaults.soffice_cmd),
            conversion_timeout=_get("CONVERSION_TIMEOUT", float, defaults.conversion_timeout),
            max_analysis_chars=_get("MAX_ANALYSIS_CHARS", int, defaults.max_analysis_chars),
            upload_dir=_get("UPLOAD_DIR", str, defaults.upload_dir),
        )
