"""
Test Configuration and Fixtures
"""
import fitz
import pytest
from docx import Document

from resume_extractor import ExtractorConfig

RESUME_LINES = [
    "Jane Doe",
    "Senior Software Engineer",
    "Experience: Built data pipelines in Python and SQL",
    "Education: BSc Computer Science, 2015",
]


@pytest.fixture
def config(tmp_path):
    """Config with the external PDF utility disabled"""
    return ExtractorConfig(
        pdftotext_cmd="pdftotext-not-installed",
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def make_pdf(tmp_path):
    """Factory writing a one-page PDF with one text line per entry"""
    def _make(lines, name="resume.pdf"):
        path = tmp_path / name
        document = fitz.open()
        page = document.new_page()
        for index, line in enumerate(lines):
            page.insert_text((72, 72 + index * 20), line, fontsize=11)
        document.save(str(path))
        document.close()
        return path
    return _make


@pytest.fixture
def resume_pdf(make_pdf):
    return make_pdf(RESUME_LINES)


@pytest.fixture
def broken_xref_pdf(tmp_path):
    """PDF signature and metadata but no usable object structure"""
    path = tmp_path / "broken.pdf"
    path.write_bytes(
        b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"
        b"<< /Title (Jane Doe Software Engineer) /Subject (Backend platform resume)\n"
        b"   /Keywords (python, distributed systems) >>\n"
        b"\x00\x01\x02\xff garbage where objects should be\n"
        b"xref\n0 9\nthis is not a cross reference table\n"
        b"startxref\n999999\n%%EOF\n"
    )
    return path


@pytest.fixture
def make_docx(tmp_path):
    """Factory writing a .docx with one paragraph per entry"""
    def _make(paragraphs, name="resume.docx"):
        path = tmp_path / name
        document = Document()
        for paragraph in paragraphs:
            document.add_paragraph(paragraph)
        document.save(str(path))
        return path
    return _make


@pytest.fixture
def make_file(tmp_path):
    """Factory writing raw bytes under the given name"""
    def _make(name, data):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _make
