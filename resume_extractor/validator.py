"""Pre-extraction file checks."""

import os
from pathlib import Path
from typing import Optional, Union

from resume_extractor.config import ExtractorConfig
from resume_extractor.exceptions import ValidationError
from resume_extractor.logger import get_logger

logger = get_logger(__name__)

PDF_SIGNATURE = b"%PDF"


class FileValidator:
    """Rejects unusable files before any parsing is attempted."""

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()

    def validate(self, file_path: Union[str, Path], original_name: str) -> None:
        """Check existence, size bounds and, for PDFs, the file signature.

        Raises:
            ValidationError: Naming the first check that failed
        """
        path = Path(file_path)

        if not path.is_file():
            self._reject("File not found", path, original_name)
        if not os.access(path, os.R_OK):
            self._reject("File is not readable", path, original_name)

        size = path.stat().st_size
        if size == 0:
            self._reject("File is empty", path, original_name)
        if size > self.config.max_file_size_bytes:
            limit_mb = self.config.max_file_size_bytes // (1024 * 1024)
            self._reject(f"File size exceeds {limit_mb}MB limit", path, original_name)

        if (original_name or "").lower().endswith(".pdf"):
            with open(path, "rb") as f:
                head = f.read(len(PDF_SIGNATURE))
            if head != PDF_SIGNATURE:
                self._reject("Invalid PDF file format", path, original_name)

        logger.debug(
            "File validation passed",
            extra_data={"file_name": original_name, "file_size_bytes": size},
        )

    @staticmethod
    def _reject(reason: str, path: Path, original_name: str) -> None:
        logger.warning(
            "File validation failed",
            extra_data={"file_name": original_name, "path": str(path), "reason": reason},
        )
        raise ValidationError(reason)
