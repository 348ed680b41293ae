"""
Pydantic schemas for transformation requests.

``TransformationRequest`` is a tagged union on ``kind``; the same models are
accepted as request bodies by the API routes.
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from notely.schemas.section import (
    HinglishTone,
    InlineAction,
    Note,
    Section,
    TargetLanguage,
    TranscriptSegment,
)


class SummarizeRequest(BaseModel):
    """Plain-prose summary of a transcript."""
    kind: Literal["summarize"] = "summarize"
    transcript: str


class RegenerateSectionRequest(BaseModel):
    """Regenerate one section from the full transcript."""
    kind: Literal["regenerate_section"] = "regenerate_section"
    section: Section
    transcript: str


class DetectSectionTypeRequest(BaseModel):
    """Classify the content type of one section."""
    kind: Literal["detect_section_type"] = "detect_section_type"
    section: Section


class DetectCategoryRequest(Note):
    """Classify the category and tags of a whole note."""
    kind: Literal["detect_category"] = "detect_category"
    sections: List[Section] = Field(..., min_length=1)


class TransformLanguageRequest(BaseModel):
    """Rewrite one section in another language or register."""
    kind: Literal["transform_language"] = "transform_language"
    target: TargetLanguage
    section: Section
    tone: HinglishTone = HinglishTone.NEUTRAL


class DetectSectionsRequest(BaseModel):
    """Split a transcript into logical sections."""
    kind: Literal["detect_sections"] = "detect_sections"
    transcript: str = ""
    segments: Optional[List[TranscriptSegment]] = None


class InlineActionRequest(BaseModel):
    """Apply a simplify/expand/example rewrite to a snippet of text."""
    kind: Literal["inline_action"] = "inline_action"
    action: InlineAction
    text: str = Field(..., min_length=1)


TransformationRequest = Annotated[
    Union[
        SummarizeRequest,
        RegenerateSectionRequest,
        DetectSectionTypeRequest,
        DetectCategoryRequest,
        TransformLanguageRequest,
        DetectSectionsRequest,
        InlineActionRequest,
    ],
    Field(discriminator="kind"),
]


class RegenerateBatchRequest(BaseModel):
    """Regenerate several sections of one note against the same transcript."""
    sections: List[Section] = Field(..., min_length=1)
    transcript: str


class MarkdownRequest(BaseModel):
    """Sections to flatten into a markdown document."""
    sections: Optional[List[Optional[Section]]] = None


# Response schemas
class SummaryResponse(BaseModel):
    summary: str


class InlineActionResponse(BaseModel):
    result: str


class MarkdownResponse(BaseModel):
    markdown: str


class CategoryResponse(BaseModel):
    type: str
    tags: List[str]
    confidence: float
    warnings: List[str] = Field(default_factory=list)


class FailureDetail(BaseModel):
    """Error body returned when a pipeline call fails."""
    kind: str
    field: Optional[str] = None
    message: str
    raw_text: Optional[str] = None
