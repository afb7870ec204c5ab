"""Resume text extraction pipeline."""

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from docx import Document

from resume_extractor.config import ExtractorConfig
from resume_extractor.detector import (
    DOC_MIME,
    DOCX_MIME,
    MIME_KINDS,
    PDF_MIME,
    TEXT_MIME,
    is_legacy_word,
    resolve_kind,
)
from resume_extractor.exceptions import (
    DecodingError,
    DocumentExtractionError,
    ExtractionFailedError,
    InsufficientContentError,
    ResumeExtractorError,
)
from resume_extractor.logger import Timer, get_logger
from resume_extractor.models import DocumentKind, ExtractionRequest, ExtractionResult
from resume_extractor.strategies import PDF_STRATEGIES, PdfStrategy
from resume_extractor.validator import FileValidator

logger = get_logger(__name__)


class TextExtractor:
    """Turns an uploaded PDF, Word or plain text resume into plain text.

    PDFs go through ``PDF_STRATEGIES`` in order until one yields text. Word
    documents get a single conversion, plain text is decoded as UTF-8. Every
    path ends with the same minimum-content check, so a returned result is
    never empty.
    """

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        validator: Optional[FileValidator] = None,
        pdf_strategies: Optional[Sequence[tuple[str, PdfStrategy]]] = None,
    ):
        """Initialize extractor.

        Args:
            config: Extraction settings. If None, uses defaults.
            validator: File validator. If None, creates one from config.
            pdf_strategies: Ordered (name, function) pairs for PDFs.
                If None, uses ``PDF_STRATEGIES``.
        """
        self.config = config or ExtractorConfig()
        self.validator = validator or FileValidator(self.config)
        self.pdf_strategies = tuple(pdf_strategies or PDF_STRATEGIES)

    def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """Extract text from a stored upload.

        Args:
            request: Path, declared MIME type and original name of the file

        Returns:
            ExtractionResult with stripped text

        Raises:
            ValidationError: If the file fails pre-checks
            UnsupportedTypeError: If the type is not PDF, Word or text
            DecodingError: If a text file is not valid UTF-8
            DocumentExtractionError: If a Word document cannot be converted
            ExtractionFailedError: If every PDF strategy failed
            InsufficientContentError: If too little text came out
        """
        path = request.path
        file_name = request.original_file_name

        self.validator.validate(path, file_name)
        kind = resolve_kind(request.declared_mime_type, file_name, path)

        with Timer("extraction") as timer:
            if kind is DocumentKind.PDF:
                text, strategy = self._extract_pdf(path, file_name)
            elif kind is DocumentKind.WORD:
                text, strategy = self._extract_word(path, request.declared_mime_type, file_name)
            else:
                text, strategy = self._extract_plain_text(path, file_name), "utf-8"

        text = self._check_content(text, file_name)

        logger.info(
            "Extracted text from resume",
            extra_data={
                "file_name": file_name,
                "kind": kind.value,
                "strategy": strategy,
                "character_count": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )

        return ExtractionResult(
            text=text,
            mime_type=self._canonical_mime(request.declared_mime_type, kind, file_name),
            file_name=file_name,
            character_count=len(text),
            strategy=strategy,
        )

    def _extract_pdf(self, path: Path, file_name: str) -> tuple[str, str]:
        last_error: Optional[str] = None

        for name, strategy in self.pdf_strategies:
            with Timer(f"pdf_{name}") as timer:
                try:
                    text = strategy(path, self.config)
                except Exception as exc:
                    last_error = str(exc) or type(exc).__name__
                    logger.debug(
                        "PDF strategy failed",
                        extra_data={
                            "file_name": file_name,
                            "strategy": name,
                            "error_type": type(exc).__name__,
                            "error": last_error,
                            "elapsed_ms": timer.get_elapsed_ms(),
                        },
                    )
                    continue

            if text and text.strip():
                logger.debug(
                    "PDF strategy succeeded",
                    extra_data={
                        "file_name": file_name,
                        "strategy": name,
                        "characters_extracted": len(text.strip()),
                        "elapsed_ms": timer.get_elapsed_ms(),
                    },
                )
                return text, name

            logger.debug(
                "PDF strategy returned no text",
                extra_data={"file_name": file_name, "strategy": name},
            )

        logger.warning(
            "All PDF extraction strategies failed",
            extra_data={"file_name": file_name, "last_error": last_error},
        )
        raise ExtractionFailedError(
            "Unable to extract text from PDF. All extraction methods failed. "
            f"Last error: {last_error or 'Unknown error'}",
            last_error=last_error,
        )

    def _extract_word(self, path: Path, mime_type: str, file_name: str) -> tuple[str, str]:
        try:
            if is_legacy_word(mime_type, file_name):
                return self._extract_doc(path, file_name), "soffice"
            return self._extract_docx(path, file_name), "docx"
        except DocumentExtractionError:
            raise
        except Exception as exc:
            logger.error(
                "Word document extraction failed",
                extra_data={
                    "file_name": file_name,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise DocumentExtractionError(
                f"Failed to extract text from Word document: {exc}"
            ) from exc

    def _extract_docx(self, path: Path, file_name: str) -> str:
        """Extract paragraphs, then table rows, with python-docx."""
        doc = Document(str(path))

        parts = [para.text.strip() for para in doc.paragraphs if para.text.strip()]
        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells]
                if any(cells):
                    parts.append(" | ".join(cells))

        logger.debug(
            "DOCX extraction completed",
            extra_data={
                "file_name": file_name,
                "paragraph_count": len(doc.paragraphs),
                "table_count": len(doc.tables),
            },
        )
        return "\n".join(parts)

    def _extract_doc(self, path: Path, file_name: str) -> str:
        """Convert legacy .doc with one headless LibreOffice run."""
        soffice = shutil.which(self.config.soffice_cmd) or shutil.which("libreoffice")
        if not soffice:
            raise DocumentExtractionError(
                "Failed to extract .doc file. Install LibreOffice or convert to DOCX."
            )

        with tempfile.TemporaryDirectory() as out_dir:
            conversion = subprocess.run(
                [soffice, "--headless", "--convert-to", "txt:Text", str(path), "--outdir", out_dir],
                capture_output=True,
                text=True,
                timeout=self.config.conversion_timeout,
            )
            out_path = Path(out_dir) / f"{path.stem}.txt"
            if conversion.returncode != 0 or not out_path.exists():
                raise DocumentExtractionError(
                    f"LibreOffice conversion failed with status {conversion.returncode}"
                )
            return out_path.read_text(encoding="utf-8", errors="ignore")

    def _extract_plain_text(self, path: Path, file_name: str) -> str:
        try:
            return path.read_bytes().decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            logger.warning(
                "Failed to decode plain text file as UTF-8",
                extra_data={"file_name": file_name, "position": exc.start},
            )
            raise DecodingError("Unable to decode text file (not valid UTF-8)") from exc
        except OSError as exc:
            raise ResumeExtractorError(f"Unable to read text file: {exc}") from exc

    def _check_content(self, text: Optional[str], file_name: str) -> str:
        stripped = (text or "").strip()
        if not stripped:
            logger.warning(
                "No text content extracted from document",
                extra_data={"file_name": file_name},
            )
            raise InsufficientContentError("No readable text found in the file", 0)
        if len(stripped) < self.config.min_text_length:
            logger.warning(
                "Extracted text below minimum length",
                extra_data={
                    "file_name": file_name,
                    "character_count": len(stripped),
                    "min_text_length": self.config.min_text_length,
                },
            )
            raise InsufficientContentError(
                "Extracted text is too short - file might be corrupted or contain only images",
                len(stripped),
            )
        return stripped

    @staticmethod
    def _canonical_mime(declared: str, kind: DocumentKind, file_name: str) -> str:
        declared = (declared or "").split(";", 1)[0].strip().lower()
        if declared in MIME_KINDS:
            return declared
        if kind is DocumentKind.PDF:
            return PDF_MIME
        if kind is DocumentKind.TEXT:
            return TEXT_MIME
        return DOC_MIME if is_legacy_word(declared, file_name) else DOCX_MIME

