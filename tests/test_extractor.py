"""
Extraction Pipeline Tests
"""
import pytest

from resume_extractor import (
    DecodingError,
    DocumentExtractionError,
    ExtractionFailedError,
    ExtractionRequest,
    InsufficientContentError,
    TextExtractor,
    UnsupportedTypeError,
    ValidationError,
    extract_text,
)
from resume_extractor import extractor as extractor_module
from resume_extractor.strategies import extract_standard

from conftest import RESUME_LINES


def _request(path, mime, name=None):
    return ExtractionRequest(
        file_path=path,
        declared_mime_type=mime,
        original_file_name=name or path.name,
    )


def _failing(message):
    def strategy(path, config):
        raise RuntimeError(message)
    return strategy


def _must_not_run(path, config):
    pytest.fail("strategy should not have been attempted")


class TestPdfPipeline:
    """Ordered PDF strategies"""

    def test_text_layer_pdf_uses_first_strategy(self, resume_pdf, config):
        """A well-formed PDF never falls through past the standard parse"""
        extractor = TextExtractor(
            config=config,
            pdf_strategies=[
                ("standard", extract_standard),
                ("layout", _must_not_run),
                ("pdftotext", _must_not_run),
                ("byte_scan", _must_not_run),
            ],
        )

        result = extractor.extract(_request(resume_pdf, "application/pdf"))

        assert result.strategy == "standard"
        assert " ".join(result.text.split()) == " ".join(RESUME_LINES)
        assert result.mime_type == "application/pdf"
        assert result.file_name == "resume.pdf"
        assert result.character_count == len(result.text)

    def test_broken_xref_recovered_by_byte_scan(self, broken_xref_pdf, config):
        """Metadata survives when structured parsing fails entirely"""
        result = TextExtractor(config=config).extract(
            _request(broken_xref_pdf, "application/pdf", "resume.pdf")
        )

        assert result.strategy == "byte_scan"
        assert "Jane Doe Software Engineer" in result.text
        assert "python, distributed systems" in result.text

    def test_falls_through_on_error_and_empty_output(self, resume_pdf, config):
        attempted = []

        def empty(path, config):
            attempted.append("empty")
            return "   \n  "

        def works(path, config):
            attempted.append("works")
            return "Recovered resume text"

        extractor = TextExtractor(
            config=config,
            pdf_strategies=[
                ("first", _failing("bad XRef entry")),
                ("second", empty),
                ("third", works),
                ("fourth", _must_not_run),
            ],
        )

        result = extractor.extract(_request(resume_pdf, "application/pdf"))

        assert attempted == ["empty", "works"]
        assert result.strategy == "third"
        assert result.text == "Recovered resume text"

    def test_all_strategies_fail(self, resume_pdf, config):
        """The last underlying error is kept for diagnostics only"""
        extractor = TextExtractor(
            config=config,
            pdf_strategies=[
                ("standard", _failing("first failure")),
                ("layout", _failing("second failure")),
                ("pdftotext", lambda path, config: ""),
                ("byte_scan", _failing("no readable text")),
            ],
        )

        with pytest.raises(ExtractionFailedError) as exc_info:
            extractor.extract(_request(resume_pdf, "application/pdf"))

        error = exc_info.value
        assert error.last_error == "no readable text"
        assert "no readable text" in str(error)
        payload = error.to_payload()
        assert error.status_code == 500
        for name in ("standard", "layout", "pdftotext", "byte_scan"):
            assert name not in payload["details"]

    def test_short_pdf_text_is_insufficient(self, make_pdf, config):
        """Degenerate output is distinct from failed extraction"""
        path = make_pdf(["Hi"])
        with pytest.raises(InsufficientContentError) as exc_info:
            TextExtractor(config=config).extract(_request(path, "application/pdf"))
        assert exc_info.value.extracted_length == 2

    def test_idempotent(self, resume_pdf, config):
        extractor = TextExtractor(config=config)
        first = extractor.extract(_request(resume_pdf, "application/pdf"))
        second = extractor.extract(_request(resume_pdf, "application/pdf"))
        assert first.text == second.text
        assert first.strategy == second.strategy


class TestValidationFirst:

    def test_zero_byte_pdf_fails_before_strategies(self, make_file, config):
        path = make_file("resume.pdf", b"")
        extractor = TextExtractor(
            config=config, pdf_strategies=[("standard", _must_not_run)]
        )
        with pytest.raises(ValidationError, match="empty"):
            extractor.extract(_request(path, "application/pdf"))

    def test_unsupported_type(self, make_file, config):
        path = make_file("photo.png", b"\x89PNG\r\n\x1a\n0000")
        with pytest.raises(UnsupportedTypeError):
            TextExtractor(config=config).extract(_request(path, "image/png"))

    def test_extension_used_when_mime_is_generic(self, make_file, config):
        path = make_file("resume.txt", b"Jane Doe, Senior Software Engineer")
        result = TextExtractor(config=config).extract(
            _request(path, "application/octet-stream")
        )
        assert result.text == "Jane Doe, Senior Software Engineer"
        assert result.mime_type == "text/plain"


class TestPlainText:

    def test_reads_utf8(self, make_file, config):
        path = make_file("resume.txt", "  José Pérez\nData Engineer  \n".encode("utf-8"))
        result = TextExtractor(config=config).extract(_request(path, "text/plain"))
        assert result.text == "José Pérez\nData Engineer"
        assert result.strategy == "utf-8"

    def test_whitespace_only_is_insufficient(self, make_file, config):
        path = make_file("resume.txt", b"   \n\t\n   ")
        with pytest.raises(InsufficientContentError, match="No readable text"):
            TextExtractor(config=config).extract(_request(path, "text/plain"))

    def test_invalid_utf8(self, make_file, config):
        path = make_file("resume.txt", b"Jane Doe \xff\xfe\xfa resume text")
        with pytest.raises(DecodingError):
            TextExtractor(config=config).extract(_request(path, "text/plain"))


class TestWordDocuments:

    def test_docx(self, make_docx, config):
        path = make_docx(["Jane Doe", "Senior Software Engineer"])
        result = TextExtractor(config=config).extract(
            _request(
                path,
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            )
        )
        assert result.text == "Jane Doe\nSenior Software Engineer"
        assert result.strategy == "docx"

    def test_corrupt_docx(self, make_file, config):
        """Conversion failure is terminal for Word documents"""
        path = make_file("resume.docx", b"PK\x03\x04 definitely not a real archive")
        with pytest.raises(DocumentExtractionError) as exc_info:
            TextExtractor(config=config).extract(_request(path, ""))
        assert "Word document" in exc_info.value.to_payload()["details"]

    def test_legacy_doc_without_libreoffice(self, make_file, config, monkeypatch):
        monkeypatch.setattr(extractor_module.shutil, "which", lambda cmd: None)
        path = make_file("resume.doc", b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1 legacy body")
        with pytest.raises(DocumentExtractionError, match="LibreOffice"):
            TextExtractor(config=config).extract(_request(path, "application/msword"))

    def test_empty_docx_is_insufficient(self, make_docx, config):
        path = make_docx([])
        with pytest.raises(InsufficientContentError):
            TextExtractor(config=config).extract(_request(path, ""))


class TestExtractText:

    def test_defaults_name_from_path(self, resume_pdf, config):
        result = extract_text(resume_pdf, config=config)
        assert result.file_name == "resume.pdf"
        assert "Jane Doe" in result.text
