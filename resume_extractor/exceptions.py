"""Error taxonomy for resume text extraction.

Only these errors cross the package boundary. Each one knows how it should be
presented to an end user: a stable ``kind``, an HTTP ``status_code``, a
user-facing ``details`` message and remediation ``suggestions``.
"""

from typing import Optional


class ResumeExtractorError(Exception):
    """Base exception for resume extractor errors."""

    kind = "extraction_error"
    status_code = 500
    default_details = "Unable to extract text from this file."
    suggestions: tuple = ()

    @property
    def details(self) -> str:
        return self.default_details

    def to_payload(self) -> dict:
        """Body suitable for an HTTP error response."""
        return {
            "error": self.kind,
            "details": self.details,
            "suggestions": list(self.suggestions),
        }


class ValidationError(ResumeExtractorError):
    """Raised when an uploaded file is missing, empty, oversized or malformed."""

    kind = "validation_error"
    status_code = 400
    suggestions = (
        "Check that your file is not corrupted",
        "Upload a PDF, DOC, DOCX or TXT file under the size limit",
    )

    @property
    def details(self) -> str:
        return f"File validation failed: {self}"


class UnsupportedTypeError(ResumeExtractorError):
    """Raised when the declared type is not PDF, Word or plain text."""

    kind = "unsupported_type"
    status_code = 400
    default_details = "Only PDF, DOC, DOCX, and TXT files are supported."
    suggestions = ("Try using a different file format (PDF, DOCX, TXT)",)


class DecodingError(ResumeExtractorError):
    """Raised when a plain text file is not valid UTF-8."""

    kind = "decoding_error"
    status_code = 400
    default_details = "Unable to read this text file. Please save it with UTF-8 encoding."
    suggestions = ("Try copying and pasting your resume text instead",)


class DocumentExtractionError(ResumeExtractorError):
    """Raised when a Word document cannot be converted to text."""

    kind = "document_extraction_error"
    default_details = (
        "Unable to read this Word document. Please try saving it as a PDF or text file."
    )
    suggestions = (
        "Try saving your document as a PDF or text file",
        "Try copying and pasting your resume text instead",
    )


class ExtractionFailedError(ResumeExtractorError):
    """Raised when every PDF strategy failed.

    ``last_error`` holds the underlying message of the final attempt for
    diagnostics; it is never part of ``details``.
    """

    kind = "extraction_failed"
    default_details = (
        "This PDF file appears to be corrupted or uses an unsupported format. "
        "Please try converting it to a different format or using a text file instead."
    )
    suggestions = (
        "Try converting your PDF to a text file",
        "Ensure your PDF is not password protected",
        "Check that your file is not corrupted",
        "Try copying and pasting your resume text instead",
    )

    def __init__(self, message: str, last_error: Optional[str] = None):
        super().__init__(message)
        self.last_error = last_error


class InsufficientContentError(ResumeExtractorError):
    """Raised when extraction worked but produced too little text.

    Typical for image-only (scanned) PDFs.
    """

    kind = "insufficient_content"
    status_code = 400
    suggestions = (
        "Ensure your resume contains readable text, not just images",
        "Convert image-based PDFs to text-based format",
        "Try copying and pasting your resume text instead",
    )

    def __init__(self, message: str, extracted_length: int = 0):
        super().__init__(message)
        self.extracted_length = extracted_length

    @property
    def details(self) -> str:
        return str(self)

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["extractedLength"] = self.extracted_length
        return payload


class AnalysisServiceError(ResumeExtractorError):
    """Raised when the AI analysis collaborator fails or answers garbage."""

    kind = "analysis_unavailable"
    status_code = 503
    default_details = (
        "Unable to analyze your resume at the moment. Please try again later."
    )
    suggestions = ("Please try again in a few moments",)
