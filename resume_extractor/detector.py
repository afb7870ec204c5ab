"""Document type resolution."""

import mimetypes
from pathlib import Path
from typing import Union

from resume_extractor.exceptions import UnsupportedTypeError
from resume_extractor.logger import get_logger
from resume_extractor.models import DocumentKind

logger = get_logger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME = "application/msword"
TEXT_MIME = "text/plain"

MIME_KINDS = {
    PDF_MIME: DocumentKind.PDF,
    DOCX_MIME: DocumentKind.WORD,
    DOC_MIME: DocumentKind.WORD,
    TEXT_MIME: DocumentKind.TEXT,
}

EXTENSION_KINDS = {
    ".pdf": DocumentKind.PDF,
    ".docx": DocumentKind.WORD,
    ".doc": DocumentKind.WORD,
    ".txt": DocumentKind.TEXT,
}


def _normalize_mime(mime_type: str) -> str:
    # "text/plain; charset=utf-8" -> "text/plain"
    return (mime_type or "").split(";", 1)[0].strip().lower()


def resolve_kind(
    declared_mime_type: str, file_name: str, file_path: Union[str, Path, None] = None
) -> DocumentKind:
    """Pick the extraction path for a file.

    The declared MIME type wins; otherwise the extension of the original name
    (then of the stored path) decides.

    Raises:
        UnsupportedTypeError: If nothing maps to PDF, Word or plain text
    """
    mime_type = _normalize_mime(declared_mime_type)
    kind = MIME_KINDS.get(mime_type)

    if kind is None:
        for candidate in (file_name, file_path):
            if not candidate:
                continue
            kind = EXTENSION_KINDS.get(Path(str(candidate)).suffix.lower())
            if kind is not None:
                break

    if kind is None:
        guessed, _ = mimetypes.guess_type(file_name or "")
        kind = MIME_KINDS.get(guessed or "")

    if kind is None:
        logger.warning(
            "Unsupported document type",
            extra_data={"file_name": file_name, "declared_mime_type": declared_mime_type},
        )
        raise UnsupportedTypeError(f"Unsupported file type: {declared_mime_type or file_name}")

    logger.debug(
        "Document type resolved",
        extra_data={
            "file_name": file_name,
            "declared_mime_type": declared_mime_type,
            "kind": kind.value,
        },
    )
    return kind


def is_legacy_word(declared_mime_type: str, file_name: str) -> bool:
    """True for the binary .doc format, False for .docx."""
    suffix = Path(file_name or "").suffix.lower()
    if suffix in (".doc", ".docx"):
        return suffix == ".doc"
    return _normalize_mime(declared_mime_type) == DOC_MIME
