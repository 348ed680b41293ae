"""
Response parsing for model output.

The model is asked for JSON but is not guaranteed to honour it, so every
parser here returns either a ``ParseSuccess`` or a ``ParseFailure`` and never
raises. Extraction is lenient (first ``{`` to last ``}``), validation is
strict.
"""
import json
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar, Union

from pydantic import ValidationError

from notely.core.constants import ParseWarnings, TagLimits
from notely.schemas.section import (
    Category,
    CategoryResult,
    DetectedSection,
    Section,
    SectionDetectionResult,
    SectionType,
    SectionTypeResult,
)

T = TypeVar("T")

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B-\x1F\x7F]")
_BACKSLASH = re.compile(r'\\(u[0-9a-fA-F]{4}|["\\/bfnrt])?')
_TAG_RE = re.compile(TagLimits.TAG_PATTERN)


class FailureKind(str, Enum):
    MODEL_UNAVAILABLE = "ModelUnavailable"
    MALFORMED_RESPONSE = "MalformedResponse"
    SCHEMA_VIOLATION = "SchemaViolation"
    SEMANTIC_VIOLATION = "SemanticViolation"


@dataclass(frozen=True)
class ParseSuccess(Generic[T]):
    """Typed value decoded from a model response."""
    value: T
    raw_text: str
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ParseFailure:
    """Classified failure with the offending field and the raw text."""
    kind: FailureKind
    message: str
    raw_text: Optional[str] = None
    field: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False


ParseResult = Union[ParseSuccess[T], ParseFailure]


class _Reject(Exception):
    """Internal signal carrying a failure out of nested validation helpers."""

    def __init__(self, failure: ParseFailure):
        super().__init__(failure.message)
        self.failure = failure


def extract_json_object(raw_text: str) -> Optional[str]:
    """Slice from the first ``{`` to the last ``}`` inclusive.

    Returns None when no such pair exists. Braces inside string values are
    not tracked, so stray braces after the real object can widen the slice.
    """
    if not raw_text:
        return None
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return raw_text[start:end + 1]


def _keep_or_double(match) -> str:
    return match.group(0) if match.group(1) else "\\\\"


def sanitize_json(text: str) -> str:
    """Make near-JSON from a model decodable.

    Control characters other than newline and tab are dropped, and a backslash
    that does not start a JSON escape (Windows paths, LaTeX) is doubled.
    Newlines and tabs inside strings are accepted by ``_loads``.
    """
    return _BACKSLASH.sub(_keep_or_double, _CONTROL_CHARS.sub("", text))


def _malformed(message: str, raw_text: str) -> _Reject:
    return _Reject(ParseFailure(
        kind=FailureKind.MALFORMED_RESPONSE,
        message=message,
        raw_text=raw_text
    ))


def _loads(candidate: str, raw_text: str) -> Any:
    try:
        return json.loads(sanitize_json(candidate), strict=False)
    except json.JSONDecodeError as e:
        raise _malformed(f"Invalid JSON in response: {e.msg}", raw_text)
    except (ValueError, RecursionError) as e:
        # oversized integer literals and pathological nesting
        raise _malformed(f"Undecodable JSON in response: {type(e).__name__}", raw_text)


def decode_json_object(raw_text: str) -> Dict[str, Any]:
    """Extract and decode the JSON object embedded in ``raw_text``.

    Raises:
        _Reject: With a MalformedResponse failure.
    """
    candidate = extract_json_object(raw_text)
    if candidate is None:
        raise _malformed("No JSON object found in response", raw_text)

    decoded = _loads(candidate, raw_text)
    if not isinstance(decoded, dict):
        raise _malformed("Response JSON is not an object", raw_text)
    return decoded


def _decode_detection_payload(raw_text: str) -> Dict[str, Any]:
    """Like ``decode_json_object``, but a bare array is read as the sections list."""
    array_start = raw_text.find("[")
    object_start = raw_text.find("{")
    array_end = raw_text.rfind("]")
    if array_start != -1 and array_end > array_start and (object_start == -1 or array_start < object_start):
        try:
            decoded = _loads(raw_text[array_start:array_end + 1], raw_text)
        except _Reject:
            decoded = None
        if isinstance(decoded, list):
            return {"sections": decoded}
    return decode_json_object(raw_text)


def _schema_violation(field_name: str, message: str, raw_text: str) -> _Reject:
    return _Reject(ParseFailure(
        kind=FailureKind.SCHEMA_VIOLATION,
        message=message,
        raw_text=raw_text,
        field=field_name
    ))


def _field_from_validation_error(error: ValidationError, prefix: str = "") -> Tuple[str, str]:
    first = error.errors()[0]
    loc = [str(part) for part in first.get("loc", ())]
    name = loc[0] if loc else "unknown"
    return f"{prefix}{name}", f"{prefix}{'.'.join(loc) or name}: {first.get('msg', 'invalid value')}"


def _validate_section(data: Any, raw_text: str, prefix: str = "") -> Section:
    if not isinstance(data, dict):
        raise _schema_violation(prefix.rstrip(".") or "section", "Section must be a JSON object", raw_text)
    for name in ("title", "summary", "bullets"):
        if name not in data:
            raise _schema_violation(f"{prefix}{name}", f"Missing required field '{prefix}{name}'", raw_text)
    try:
        return Section.model_validate(
            {"title": data["title"], "summary": data["summary"], "bullets": data["bullets"]},
            strict=True
        )
    except ValidationError as e:
        field_name, message = _field_from_validation_error(e, prefix)
        raise _schema_violation(field_name, message, raw_text)


def _as_finite_float(value: Any) -> Optional[float]:
    """None for bools, non-numbers, NaN/inf and integers too large for a float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _validate_confidence(data: Dict[str, Any], raw_text: str) -> float:
    """Confidence is advisory: any finite number is accepted and clamped to [0, 1]."""
    if "confidence" not in data:
        raise _schema_violation("confidence", "Missing required field 'confidence'", raw_text)
    value = _as_finite_float(data["confidence"])
    if value is None:
        raise _schema_violation("confidence", "'confidence' must be a finite number", raw_text)
    return min(1.0, max(0.0, value))


def _validate_label(data: Dict[str, Any], label_enum, raw_text: str):
    if "type" not in data:
        raise _schema_violation("type", "Missing required field 'type'", raw_text)
    label = label_enum.decode(data["type"])
    if label is None:
        raise _schema_violation(
            "type",
            f"'type' must be one of {', '.join(label_enum.labels())}; got {data['type']!r}",
            raw_text
        )
    return label


def _validate_tags(data: Dict[str, Any], raw_text: str) -> List[str]:
    if "tags" not in data:
        raise _schema_violation("tags", "Missing required field 'tags'", raw_text)
    tags = data["tags"]
    if not isinstance(tags, list):
        raise _schema_violation("tags", "'tags' must be an array of strings", raw_text)

    unique: List[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            raise _schema_violation("tags", "'tags' must be an array of strings", raw_text)
        if not _TAG_RE.match(tag):
            raise _schema_violation("tags", f"Tag {tag!r} is not lowercase hyphen-delimited", raw_text)
        if tag not in unique:
            unique.append(tag)
    return unique


def parse_section_response(raw_text: str) -> ParseResult[Section]:
    """Parse a RegenerateSection / TransformLanguage response."""
    try:
        data = decode_json_object(raw_text)
        section = _validate_section(data, raw_text)
    except _Reject as rejected:
        return rejected.failure
    return ParseSuccess(value=section, raw_text=raw_text)


def parse_section_type_response(raw_text: str) -> ParseResult[SectionTypeResult]:
    """Parse a DetectSectionType response."""
    try:
        data = decode_json_object(raw_text)
        label = _validate_label(data, SectionType, raw_text)
        confidence = _validate_confidence(data, raw_text)
    except _Reject as rejected:
        return rejected.failure
    return ParseSuccess(
        value=SectionTypeResult(type=label, confidence=confidence),
        raw_text=raw_text
    )


def parse_category_response(raw_text: str) -> ParseResult[CategoryResult]:
    """Parse a DetectCategory response.

    A tag count outside 3..8 is accepted and reported as a warning so callers
    can decide to trust or truncate.
    """
    try:
        data = decode_json_object(raw_text)
        label = _validate_label(data, Category, raw_text)
        tags = _validate_tags(data, raw_text)
        confidence = _validate_confidence(data, raw_text)
    except _Reject as rejected:
        return rejected.failure

    warnings = []
    if not TagLimits.MIN_TAGS <= len(tags) <= TagLimits.MAX_TAGS:
        warnings.append(ParseWarnings.TAG_COUNT_OUT_OF_RANGE)

    return ParseSuccess(
        value=CategoryResult(type=label, tags=tags, confidence=confidence),
        raw_text=raw_text,
        warnings=warnings
    )


def _validate_optional_time(item: Dict[str, Any], key: str, prefix: str, raw_text: str) -> Optional[float]:
    value = item.get(key)
    if value is None:
        return None
    seconds = _as_finite_float(value)
    if seconds is None:
        raise _schema_violation(f"{prefix}{key}", f"'{prefix}{key}' must be a number", raw_text)
    return seconds


def parse_section_detection_response(raw_text: str) -> ParseResult[SectionDetectionResult]:
    """Parse a DetectSections response.

    The usual shape is ``{"summary", "tags", "sections"}`` with summary and
    tags optional; a bare array is accepted as the sections list.
    """
    try:
        data = _decode_detection_payload(raw_text)

        if "sections" not in data:
            raise _schema_violation("sections", "Missing required field 'sections'", raw_text)
        if not isinstance(data["sections"], list):
            raise _schema_violation("sections", "'sections' must be an array", raw_text)

        detected = []
        for i, item in enumerate(data["sections"]):
            prefix = f"sections.{i}."
            section = _validate_section(item, raw_text, prefix=prefix)
            detected.append(DetectedSection(
                title=section.title,
                summary=section.summary,
                bullets=list(section.bullets),
                start_time=_validate_optional_time(item, "startTime", prefix, raw_text),
                end_time=_validate_optional_time(item, "endTime", prefix, raw_text)
            ))

        summary = data.get("summary", "")
        if not isinstance(summary, str):
            raise _schema_violation("summary", "'summary' must be a string", raw_text)

        tags = data.get("tags", [])
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise _schema_violation("tags", "'tags' must be an array of strings", raw_text)
    except _Reject as rejected:
        return rejected.failure

    return ParseSuccess(
        value=SectionDetectionResult(summary=summary, tags=tags, sections=detected),
        raw_text=raw_text
    )


def parse_text_response(raw_text: Optional[str]) -> ParseResult[str]:
    """Plain-prose responses only need to be non-blank."""
    text = (raw_text or "").strip()
    if not text:
        return ParseFailure(
            kind=FailureKind.MALFORMED_RESPONSE,
            message="Empty response",
            raw_text=raw_text
        )
    return ParseSuccess(value=text, raw_text=raw_text)
