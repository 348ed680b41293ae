"""
Pydantic schemas for note sections and classification results.
"""
import json
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LabelEnum(str, Enum):
    """Closed label set decoded from model output by exact match only."""

    @classmethod
    def decode(cls, value: object) -> Optional["LabelEnum"]:
        """Return the member whose value equals ``value`` exactly, else None."""
        if not isinstance(value, str):
            return None
        for member in cls:
            if member.value == value:
                return member
        return None

    @classmethod
    def labels(cls) -> List[str]:
        return [member.value for member in cls]


class SectionType(LabelEnum):
    """Content type of a single section."""
    TUTORIAL = "Tutorial"
    INTERVIEW = "Interview"
    LECTURE = "Lecture"
    REVIEW = "Review"
    EXPLANATION = "Explanation"
    STORY = "Story"
    DISCUSSION = "Discussion"
    OTHER = "Other"


class Category(LabelEnum):
    """Primary category of a whole note."""
    TUTORIAL = "Tutorial"
    INTERVIEW = "Interview"
    LECTURE = "Lecture"
    REVIEW = "Review"
    DOCUMENTARY = "Documentary"
    PODCAST = "Podcast"
    NEWS = "News"
    ENTERTAINMENT = "Entertainment"
    TECHNICAL = "Technical"
    BUSINESS = "Business"
    OTHER = "Other"


class TargetLanguage(str, Enum):
    ENGLISH = "english"
    HINDI = "hindi"
    HINGLISH = "hinglish"


class HinglishTone(str, Enum):
    NEUTRAL = "neutral"
    CASUAL = "casual"
    INTERVIEW = "interview"


class InlineAction(str, Enum):
    SIMPLIFY = "simplify"
    EXPAND = "expand"
    EXAMPLE = "example"


class Section(BaseModel):
    """One topical chunk of a note: title, summary and ordered bullet points."""
    title: str = ""
    summary: str = ""
    bullets: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def to_json(self) -> str:
        """Serialize for embedding in a prompt (stable key order, 2-space indent)."""
        return json.dumps(
            {"title": self.title, "summary": self.summary, "bullets": list(self.bullets)},
            indent=2,
            ensure_ascii=False
        )


class Note(BaseModel):
    """Ordered sections derived from one transcript."""
    sections: List[Section] = Field(default_factory=list)


class TranscriptSegment(BaseModel):
    """Schema for a transcript segment."""
    text: str
    start: float = Field(..., ge=0)
    duration: float = Field(0, ge=0)


class DetectedSection(Section):
    """A section produced by transcript segmentation, with optional timing."""
    start_time: Optional[float] = Field(None, alias="startTime")
    end_time: Optional[float] = Field(None, alias="endTime")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SectionDetectionResult(BaseModel):
    """Overall summary, tags and sections detected from a transcript."""
    summary: str = ""
    tags: List[str] = Field(default_factory=list)
    sections: List[DetectedSection] = Field(default_factory=list)


class SectionTypeResult(BaseModel):
    """Content type classification for one section."""
    type: SectionType
    confidence: float = Field(..., ge=0.0, le=1.0)


class CategoryResult(BaseModel):
    """Category and tag classification for a whole note."""
    type: Category
    tags: List[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=1.0)
