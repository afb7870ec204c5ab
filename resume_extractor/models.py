"""Data models for resume extraction."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Union


class DocumentKind(str, Enum):
    PDF = "pdf"
    WORD = "word"
    TEXT = "text"


@dataclass(frozen=True)
class ExtractionRequest:
    """One file to extract, as handed over by the upload receiver."""

    file_path: Union[str, Path]
    declared_mime_type: str
    original_file_name: str

    @property
    def path(self) -> Path:
        return Path(self.file_path)


@dataclass
class ExtractionResult:
    """Result of a successful extraction."""

    text: str  # stripped, never shorter than the configured minimum
    mime_type: str
    file_name: str
    character_count: int
    strategy: str  # which extraction method produced the text


@dataclass(frozen=True)
class StoredUpload:
    """A file the upload receiver has written to temporary storage."""

    path: Union[str, Path]
    original_name: str
    mime_type: str
    size: int

    def to_request(self) -> ExtractionRequest:
        return ExtractionRequest(
            file_path=self.path,
            declared_mime_type=self.mime_type,
            original_file_name=self.original_name,
        )


@dataclass
class ResumeAnalysis:
    """Normalized answer of the AI analysis service."""

    score: int = 0
    ats_score: int = 0
    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    rewritten_resume: str = ""
    cover_letter: str = ""

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "atsScore": self.ats_score,
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "keywords": list(self.keywords),
            "suggestions": list(self.suggestions),
            "rewrittenResume": self.rewritten_resume,
            "coverLetter": self.cover_letter,
        }


@dataclass
class AnalysisOutcome:
    """What the caller persists after a successful analysis."""

    file_name: str
    resume_text: str
    target_role: str
    analysis: ResumeAnalysis
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def extracted_length(self) -> int:
        return len(self.resume_text)
