"""PDF text extraction strategies.

Each strategy is a plain function ``(path, config) -> str``. A strategy either
returns text (possibly empty) or raises; ``TextExtractor`` tries them in the
order of ``PDF_STRATEGIES`` and keeps the first non-empty result.
"""

import re
import shutil
import subprocess
from pathlib import Path
from typing import Callable

import fitz  # PyMuPDF

from resume_extractor.config import ExtractorConfig

PdfStrategy = Callable[[Path, ExtractorConfig], str]

_WHITESPACE_RE = re.compile(r"\s+")

_METADATA_FIELDS = ("Title", "Subject", "Keywords")
_METADATA_RES = {
    name: re.compile(rb"/" + name.encode("ascii") + rb"\s*\(([^)]+)\)")
    for name in _METADATA_FIELDS
}
# Rough approximation of a PDF string literal holding readable text
_LITERAL_RE = re.compile(rb"\(([A-Za-z0-9\s,.]{10,})\)")
_LETTER_RE = re.compile(r"[A-Za-z]")


def extract_standard(path: Path, config: ExtractorConfig) -> str:
    """Read the text layer page by page."""
    with fitz.open(str(path)) as document:
        return "\n".join(page.get_text("text") for page in document)


def extract_layout(path: Path, config: ExtractorConfig) -> str:
    """Rebuild lines from text spans using their baseline.

    Whitespace inside each span is collapsed. A span whose baseline y differs
    from the previous span starts a new line; otherwise it is appended to the
    current one.
    """
    pages = []
    with fitz.open(str(path)) as document:
        for page in document:
            page_text = ""
            last_y = None
            for block in page.get_text("dict").get("blocks", []):
                for line in block.get("lines", []):
                    for span in line.get("spans", []):
                        fragment = _WHITESPACE_RE.sub(" ", span.get("text", ""))
                        y = span.get("origin", (0.0, 0.0))[1]
                        if last_y is None or y == last_y:
                            page_text += fragment
                        else:
                            page_text += "\n" + fragment
                        last_y = y
            pages.append(page_text)
    return "\n".join(pages)


def extract_with_pdftotext(path: Path, config: ExtractorConfig) -> str:
    """Shell out to poppler's pdftotext and read its stdout."""
    binary = shutil.which(config.pdftotext_cmd)
    if not binary:
        raise FileNotFoundError(f"{config.pdftotext_cmd} is not available")

    result = subprocess.run(
        [binary, "-enc", "UTF-8", str(path), "-"],
        capture_output=True,
        timeout=config.pdftotext_timeout,
    )
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise RuntimeError(f"{config.pdftotext_cmd} exited with status {result.returncode}: {stderr}")

    return result.stdout.decode("utf-8", errors="replace")


def extract_byte_scan(path: Path, config: ExtractorConfig) -> str:
    """Salvage metadata and literal strings from the raw bytes.

    Works even when the cross-reference table is broken. Approximate by
    nature: it can miss real text and pick up printable runs from binary
    streams.
    """
    data = path.read_bytes()
    extracted = ""

    for name in _METADATA_FIELDS:
        match = _METADATA_RES[name].search(data)
        if match:
            extracted += f"{name}: {match.group(1).decode('latin-1')}\n"

    literals = [
        match.decode("latin-1")
        for match in _LITERAL_RE.findall(data)
    ]
    extracted += " ".join(
        text for text in literals if len(text) > 10 and _LETTER_RE.search(text)
    )

    if not extracted.strip():
        raise ValueError("No readable text found in PDF")

    return extracted


PDF_STRATEGIES: tuple[tuple[str, PdfStrategy], ...] = (
    ("standard", extract_standard),
    ("layout", extract_layout),
    ("pdftotext", extract_with_pdftotext),
    ("byte_scan", extract_byte_scan),
)
