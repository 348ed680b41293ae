from notely.schemas.section import (
    Category,
    CategoryResult,
    DetectedSection,
    HinglishTone,
    InlineAction,
    Note,
    Section,
    SectionDetectionResult,
    SectionType,
    SectionTypeResult,
    TargetLanguage,
    TranscriptSegment,
)
from notely.schemas.requests import (
    DetectCategoryRequest,
    DetectSectionsRequest,
    DetectSectionTypeRequest,
    InlineActionRequest,
    RegenerateSectionRequest,
    SummarizeRequest,
    TransformationRequest,
    TransformLanguageRequest,
)

__all__ = [
    "Category",
    "CategoryResult",
    "DetectedSection",
    "HinglishTone",
    "InlineAction",
    "Note",
    "Section",
    "SectionDetectionResult",
    "SectionType",
    "SectionTypeResult",
    "TargetLanguage",
    "TranscriptSegment",
    "DetectCategoryRequest",
    "DetectSectionsRequest",
    "DetectSectionTypeRequest",
    "InlineActionRequest",
    "RegenerateSectionRequest",
    "SummarizeRequest",
    "TransformationRequest",
    "TransformLanguageRequest",
]
