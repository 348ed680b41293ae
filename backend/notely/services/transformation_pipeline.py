"""
Transformation pipeline: build prompt -> one generate() call -> parse -> check.

Every public method returns a ``ParseSuccess`` or a ``ParseFailure``; nothing
raises past this boundary. The pipeline holds no state between calls, so
regenerating the same section repeatedly always starts from the caller's
current section and transcript, and calls may run in parallel.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from notely.core.constants import PipelineLimits
from notely.prompts import (
    build_category_prompt,
    build_inline_action_prompt,
    build_language_transform_prompt,
    build_regenerate_section_prompt,
    build_section_detection_prompt,
    build_section_detection_with_timestamps_prompt,
    build_section_type_prompt,
    build_summary_prompt,
)
from notely.schemas.requests import (
    DetectCategoryRequest,
    DetectSectionsRequest,
    DetectSectionTypeRequest,
    InlineActionRequest,
    RegenerateSectionRequest,
    SummarizeRequest,
    TransformLanguageRequest,
)
from notely.schemas.section import (
    CategoryResult,
    HinglishTone,
    InlineAction,
    Note,
    Section,
    SectionDetectionResult,
    SectionTypeResult,
    TargetLanguage,
    TranscriptSegment,
)
from notely.services.response_parser import (
    FailureKind,
    ParseFailure,
    ParseResult,
    parse_category_response,
    parse_section_detection_response,
    parse_section_response,
    parse_section_type_response,
    parse_text_response,
)

Generate = Callable[[str], str]


def check_section_populated(result: ParseResult[Section]) -> ParseResult[Section]:
    """Title and summary must survive a regenerate/transform non-blank.

    The bullet count is allowed to change.
    """
    if not result.ok:
        return result
    for field_name in ("title", "summary"):
        if not getattr(result.value, field_name).strip():
            return ParseFailure(
                kind=FailureKind.SEMANTIC_VIOLATION,
                message=f"'{field_name}' is empty after transformation",
                raw_text=result.raw_text,
                field=field_name
            )
    return result


class TransformationPipeline:
    """Runs one section transformation per call against an injected model."""

    def __init__(
        self,
        generate: Generate,
        logger: Optional[logging.Logger] = None,
        classify: Optional[Generate] = None
    ):
        """
        Args:
            generate: ``prompt -> raw text`` capability; any exception it raises
                is reported as ModelUnavailable.
            logger: Where to report failures. Defaults to this module's logger.
            classify: Capability for the two label-picking operations, usually
                bound to a cheaper model. Defaults to ``generate``.
        """
        self._generate = generate
        self._classify = classify or generate
        self._logger = logger or logging.getLogger(__name__)

    def _execute(
        self,
        operation: str,
        prompt: str,
        parse: Callable[[str], ParseResult],
        generate: Optional[Generate] = None
    ) -> ParseResult:
        try:
            raw_text = (generate or self._generate)(prompt)
        except Exception as e:
            failure = ParseFailure(
                kind=FailureKind.MODEL_UNAVAILABLE,
                message=f"Model call failed: {e}"
            )
            self._report(operation, failure)
            return failure

        result = parse(raw_text)
        if not result.ok:
            self._report(operation, result)
        elif result.warnings:
            self._logger.info(f"[Pipeline] {operation} succeeded with warnings: {', '.join(result.warnings)}")
        return result

    def _report(self, operation: str, failure: ParseFailure) -> None:
        field_note = f" (field: {failure.field})" if failure.field else ""
        self._logger.warning(f"[Pipeline] {operation} failed: {failure.kind.value}{field_note} - {failure.message}")
        if failure.raw_text:
            self._logger.debug(f"[Pipeline] {operation} raw response: {failure.raw_text[:500]}")

    def summarize(self, transcript: str) -> ParseResult[str]:
        return self._execute("summarize", build_summary_prompt(transcript), parse_text_response)

    def regenerate_section(self, section: Section, transcript: str) -> ParseResult[Section]:
        prompt = build_regenerate_section_prompt(section, transcript)
        return self._execute(
            "regenerate_section",
            prompt,
            lambda raw: check_section_populated(parse_section_response(raw))
        )

    def regenerate_sections(
        self,
        sections: Sequence[Section],
        transcript: str,
        max_workers: int = PipelineLimits.MAX_PARALLEL_SECTIONS
    ) -> List[ParseResult[Section]]:
        """Regenerate several sections in parallel; results keep input order."""
        if not sections:
            return []
        with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(sections)))) as executor:
            return list(executor.map(
                lambda section: self.regenerate_section(section, transcript),
                sections
            ))

    def detect_section_type(self, section: Section) -> ParseResult[SectionTypeResult]:
        return self._execute(
            "detect_section_type",
            build_section_type_prompt(section),
            parse_section_type_response,
            self._classify
        )

    def detect_category(self, note: Note) -> ParseResult[CategoryResult]:
        return self._execute(
            "detect_category",
            build_category_prompt(note.sections),
            parse_category_response,
            self._classify
        )

    def transform_language(
        self,
        target: TargetLanguage,
        section: Section,
        tone: HinglishTone = HinglishTone.NEUTRAL
    ) -> ParseResult[Section]:
        prompt = build_language_transform_prompt(target, section, tone)
        return self._execute(
            f"transform_language[{TargetLanguage(target).value}]",
            prompt,
            lambda raw: check_section_populated(parse_section_response(raw))
        )

    def detect_sections(
        self,
        transcript: str = "",
        segments: Optional[Sequence[TranscriptSegment]] = None
    ) -> ParseResult[SectionDetectionResult]:
        """Split a transcript into sections; timed segments give exact startTimes."""
        if segments:
            prompt = build_section_detection_with_timestamps_prompt(segments)
        else:
            prompt = build_section_detection_prompt(transcript)
        return self._execute("detect_sections", prompt, parse_section_detection_response)

    def inline_action(self, action: InlineAction, text: str) -> ParseResult[str]:
        return self._execute(
            f"inline_action[{InlineAction(action).value}]",
            build_inline_action_prompt(action, text),
            parse_text_response
        )

    def run(self, request) -> ParseResult:
        """Dispatch a ``TransformationRequest`` to its operation."""
        if isinstance(request, SummarizeRequest):
            return self.summarize(request.transcript)
        if isinstance(request, RegenerateSectionRequest):
            return self.regenerate_section(request.section, request.transcript)
        if isinstance(request, DetectSectionTypeRequest):
            return self.detect_section_type(request.section)
        if isinstance(request, DetectCategoryRequest):
            return self.detect_category(request)
        if isinstance(request, TransformLanguageRequest):
            return self.transform_language(request.target, request.section, request.tone)
        if isinstance(request, DetectSectionsRequest):
            return self.detect_sections(request.transcript, request.segments)
        if isinstance(request, InlineActionRequest):
            return self.inline_action(request.action, request.text)
        raise TypeError(f"Unsupported transformation request: {type(request).__name__}")
