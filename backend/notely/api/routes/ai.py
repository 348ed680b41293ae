"""
AI routes for section transformations and markdown export.

Each route makes one pipeline call. Model failures map to 503, unusable
model output maps to 502, and both carry the failure detail.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from notely.api.dependencies.pipeline import get_pipeline
from notely.schemas.requests import (
    CategoryResponse,
    DetectCategoryRequest,
    DetectSectionsRequest,
    DetectSectionTypeRequest,
    FailureDetail,
    InlineActionRequest,
    InlineActionResponse,
    MarkdownRequest,
    MarkdownResponse,
    RegenerateBatchRequest,
    RegenerateSectionRequest,
    SummarizeRequest,
    SummaryResponse,
    TransformLanguageRequest,
)
from notely.schemas.section import Section, SectionDetectionResult, SectionTypeResult
from notely.services.markdown_renderer import to_markdown
from notely.services.response_parser import FailureKind, ParseFailure, ParseResult
from notely.services.transformation_pipeline import TransformationPipeline


router = APIRouter(prefix="/api/ai", tags=["ai"])


def failure_detail(failure: ParseFailure) -> dict:
    return FailureDetail(
        kind=failure.kind.value,
        field=failure.field,
        message=failure.message,
        raw_text=failure.raw_text
    ).model_dump()


def unwrap(result: ParseResult):
    """Return the parsed value or raise the matching HTTPException."""
    if result.ok:
        return result.value
    status_code = (
        status.HTTP_503_SERVICE_UNAVAILABLE
        if result.kind == FailureKind.MODEL_UNAVAILABLE
        else status.HTTP_502_BAD_GATEWAY
    )
    raise HTTPException(status_code=status_code, detail=failure_detail(result))


@router.post("/summarize", response_model=SummaryResponse)
def summarize(
    request: SummarizeRequest,
    pipeline: TransformationPipeline = Depends(get_pipeline)
) -> SummaryResponse:
    """Plain-prose summary of a transcript."""
    return SummaryResponse(summary=unwrap(pipeline.run(request)))


@router.post("/sections/regenerate", response_model=Section)
def regenerate_section(
    request: RegenerateSectionRequest,
    pipeline: TransformationPipeline = Depends(get_pipeline)
) -> Section:
    """
    Regenerate one section from the full transcript.

    - Returns the replacement section (never a partial patch)
    - 502 if the model output is unusable; the caller keeps the old section
    """
    return unwrap(pipeline.run(request))


@router.post("/sections/regenerate-batch", response_model=List[dict])
def regenerate_sections(
    request: RegenerateBatchRequest,
    pipeline: TransformationPipeline = Depends(get_pipeline)
) -> List[dict]:
    """
    Regenerate several sections in parallel.

    Returns one entry per input section, in order: either
    ``{"ok": true, "section": {...}}`` or ``{"ok": false, "error": {...}}``.
    """
    results = pipeline.regenerate_sections(request.sections, request.transcript)
    return [
        {"ok": True, "section": result.value.model_dump()}
        if result.ok
        else {"ok": False, "error": failure_detail(result)}
        for result in results
    ]


@router.post("/sections/detect-type", response_model=SectionTypeResult)
def detect_section_type(
    request: DetectSectionTypeRequest,
    pipeline: TransformationPipeline = Depends(get_pipeline)
) -> SectionTypeResult:
    """Classify the content type of one section."""
    return unwrap(pipeline.run(request))


@router.post("/sections/transform-language", response_model=Section)
def transform_language(
    request: TransformLanguageRequest,
    pipeline: TransformationPipeline = Depends(get_pipeline)
) -> Section:
    """Rewrite one section in English, Hindi or Hinglish."""
    return unwrap(pipeline.run(request))


@router.post("/sections/detect", response_model=SectionDetectionResult, response_model_by_alias=True)
def detect_sections(
    request: DetectSectionsRequest,
    pipeline: TransformationPipeline = Depends(get_pipeline)
) -> SectionDetectionResult:
    """Split a transcript (or timed segments) into sections."""
    if not request.transcript.strip() and not request.segments:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Transcript or segments are required"
        )
    return unwrap(pipeline.run(request))


@router.post("/notes/detect-category", response_model=CategoryResponse)
def detect_category(
    request: DetectCategoryRequest,
    pipeline: TransformationPipeline = Depends(get_pipeline)
) -> CategoryResponse:
    """Classify a note's category and tags; out-of-range tag counts come back as warnings."""
    result = pipeline.run(request)
    category = unwrap(result)
    return CategoryResponse(
        type=category.type.value,
        tags=category.tags,
        confidence=category.confidence,
        warnings=result.warnings
    )


@router.post("/inline", response_model=InlineActionResponse)
def inline_action(
    request: InlineActionRequest,
    pipeline: TransformationPipeline = Depends(get_pipeline)
) -> InlineActionResponse:
    """Simplify, expand or add an example to a snippet of text."""
    return InlineActionResponse(result=unwrap(pipeline.run(request)))


@router.post("/notes/markdown", response_model=MarkdownResponse)
def export_markdown(request: MarkdownRequest) -> MarkdownResponse:
    """Flatten sections to a markdown document (no model call)."""
    return MarkdownResponse(markdown=to_markdown(request.sections))
