"""
Unit tests for model response parsing.
"""
import json
import re

import pytest

from notely.core.constants import ParseWarnings, TagLimits
from notely.schemas.section import Category, Section, SectionType
from notely.services.response_parser import (
    FailureKind,
    extract_json_object,
    parse_category_response,
    parse_section_detection_response,
    parse_section_response,
    parse_section_type_response,
    parse_text_response,
)


class TestJsonExtraction:
    """Test lenient extraction of the JSON object from raw text."""

    def test_strips_leading_prose(self):
        """Should parse a response with explanatory prose before the JSON."""
        raw = 'Sure! Here is the JSON: {"type": "Tutorial", "confidence": 0.8}'

        result = parse_section_type_response(raw)

        assert result.ok
        assert result.value.type == SectionType.TUTORIAL

    def test_strips_markdown_code_fence(self, regenerated_payload):
        """Should handle JSON wrapped in markdown code blocks."""
        raw = f"```json\n{json.dumps(regenerated_payload)}\n```"

        result = parse_section_response(raw)

        assert result.ok
        assert result.value.title == "Load Balancing"

    def test_slices_first_to_last_brace(self):
        raw = 'prefix {"a": {"b": 1}} suffix'

        assert extract_json_object(raw) == '{"a": {"b": 1}}'

    @pytest.mark.parametrize("raw", ["", "no json here", "} backwards {", "only { open"])
    def test_missing_brace_pair_is_malformed(self, raw):
        result = parse_section_response(raw)

        assert not result.ok
        assert result.kind == FailureKind.MALFORMED_RESPONSE
        assert result.raw_text == raw

    def test_invalid_json_is_malformed(self):
        """Should not raise on a broken object."""
        raw = '{"title": "x", "summary": }'

        result = parse_section_response(raw)

        assert result.kind == FailureKind.MALFORMED_RESPONSE
        assert result.field is None

    def test_raw_newline_inside_string_is_tolerated(self):
        """Raw newlines and tabs inside string values should survive decoding."""
        raw = '{"title": "Line one\nline two", "summary": "a\tb", "bullets": []}'

        result = parse_section_response(raw)

        assert result.ok
        assert result.value.title == "Line one\nline two"
        assert result.value.summary == "a\tb"

    def test_other_control_characters_are_dropped(self):
        raw = '{"title": "Bell\x07 and null\x00", "summary": "s", "bullets": []}'

        result = parse_section_response(raw)

        assert result.value.title == "Bell and null"

    def test_windows_path_backslashes_are_repaired(self):
        raw = r'{"title":"Paths","summary":"Files live in C:\Users\notes","bullets":[]}'

        result = parse_section_response(raw)

        assert result.ok
        assert result.value.summary.startswith("Files live in C:\\Users")

    def test_latex_backslashes_are_repaired(self):
        raw = r'{"title":"Greek","summary":"The angle $\alpha$ is small","bullets":["Use \sum here"]}'

        result = parse_section_response(raw)

        assert result.ok
        assert result.value.summary == "The angle $\\alpha$ is small"
        assert result.value.bullets == ["Use \\sum here"]

    def test_valid_escapes_are_untouched(self):
        raw = r'{"title":"Quote \"x\"","summary":"C:\\tmp \u00e9","bullets":[]}'

        result = parse_section_response(raw)

        assert result.value.title == 'Quote "x"'
        assert result.value.summary == "C:\\tmp \u00e9"

    def test_deeply_nested_json_is_malformed(self):
        raw = '{"title":' + '[' * 100000 + ']' * 100000 + '}'

        result = parse_section_response(raw)

        assert not result.ok
        assert result.kind == FailureKind.MALFORMED_RESPONSE

    def test_oversized_integer_literal_does_not_raise(self):
        raw = '{"type":"Tutorial","confidence":' + '1' * 5000 + '}'

        result = parse_section_type_response(raw)

        assert not result.ok
        assert result.kind in (FailureKind.MALFORMED_RESPONSE, FailureKind.SCHEMA_VIOLATION)


class TestSectionResponse:
    """Test RegenerateSection / TransformLanguage schema validation."""

    def test_valid_section(self, regenerated_payload):
        result = parse_section_response(json.dumps(regenerated_payload))

        assert result.ok
        assert result.value == Section(**regenerated_payload)
        assert result.warnings == []

    @pytest.mark.parametrize("missing", ["title", "summary", "bullets"])
    def test_missing_field_is_schema_violation(self, regenerated_payload, missing):
        """Should name the missing field."""
        del regenerated_payload[missing]

        result = parse_section_response(json.dumps(regenerated_payload))

        assert result.kind == FailureKind.SCHEMA_VIOLATION
        assert result.field == missing

    @pytest.mark.parametrize("field_name,bad_value", [
        ("title", 42),
        ("summary", None),
        ("bullets", "not a list"),
        ("bullets", ["ok", 3]),
    ])
    def test_mistyped_field_is_schema_violation(self, regenerated_payload, field_name, bad_value):
        """Should reject wrong types without coercion."""
        regenerated_payload[field_name] = bad_value

        result = parse_section_response(json.dumps(regenerated_payload))

        assert result.kind == FailureKind.SCHEMA_VIOLATION
        assert result.field == field_name

    def test_extra_keys_are_ignored(self, regenerated_payload):
        regenerated_payload["emoji"] = "nope"

        result = parse_section_response(json.dumps(regenerated_payload))

        assert result.ok

    def test_idempotent_on_valid_json(self, regenerated_payload):
        """Parsing the same canonical response twice should give equal results."""
        raw = json.dumps(regenerated_payload)

        assert parse_section_response(raw) == parse_section_response(raw)


class TestSectionTypeResponse:
    """Test DetectSectionType validation."""

    def test_clamps_confidence_above_one(self):
        result = parse_section_type_response('{"type":"Tutorial","confidence":1.7}')

        assert result.ok
        assert result.value.confidence == 1.0

    def test_clamps_negative_confidence(self):
        result = parse_section_type_response('{"type":"Story","confidence":-0.2}')

        assert result.value.confidence == 0.0

    def test_integer_confidence(self):
        result = parse_section_type_response('{"type":"Lecture","confidence":1}')

        assert result.value.confidence == 1.0

    @pytest.mark.parametrize("label", ["tutorial", "Podcast", "TUTORIAL", " Tutorial", 7])
    def test_rejects_labels_outside_set(self, label):
        """Should only accept the exact eight labels."""
        raw = json.dumps({"type": label, "confidence": 0.5})

        result = parse_section_type_response(raw)

        assert result.kind == FailureKind.SCHEMA_VIOLATION
        assert result.field == "type"

    @pytest.mark.parametrize("confidence", ["0.9", True, None, float("nan")])
    def test_rejects_non_numeric_confidence(self, confidence):
        raw = json.dumps({"type": "Review", "confidence": confidence})

        result = parse_section_type_response(raw)

        assert result.kind == FailureKind.SCHEMA_VIOLATION
        assert result.field == "confidence"

    def test_missing_confidence(self):
        result = parse_section_type_response('{"type": "Review"}')

        assert result.field == "confidence"

    def test_integer_too_large_for_float(self):
        raw = '{"type":"Tutorial","confidence":1' + '0' * 400 + '}'

        result = parse_section_type_response(raw)

        assert result.kind == FailureKind.SCHEMA_VIOLATION
        assert result.field == "confidence"


class TestCategoryResponse:
    """Test DetectCategory validation."""

    def setup_method(self):
        self.valid = {
            "type": "Technical",
            "tags": ["load-balancing", "system-design", "networking"],
            "confidence": 0.92
        }

    def test_valid_category(self):
        result = parse_category_response(json.dumps(self.valid))

        assert result.ok
        assert result.value.type == Category.TECHNICAL
        assert result.value.tags == self.valid["tags"]
        assert result.warnings == []

    def test_tags_match_pattern(self):
        result = parse_category_response(json.dumps(self.valid))

        for tag in result.value.tags:
            assert re.match(TagLimits.TAG_PATTERN, tag)

    @pytest.mark.parametrize("bad_tag", ["Machine-Learning", "machine learning", "web_dev", "-lead", "trail-", "a--b", ""])
    def test_rejects_malformed_tags(self, bad_tag):
        self.valid["tags"] = ["ok", bad_tag, "fine-too"]

        result = parse_category_response(json.dumps(self.valid))

        assert result.kind == FailureKind.SCHEMA_VIOLATION
        assert result.field == "tags"

    def test_too_few_tags_is_flagged_not_rejected(self):
        self.valid["tags"] = ["python"]

        result = parse_category_response(json.dumps(self.valid))

        assert result.ok
        assert result.warnings == [ParseWarnings.TAG_COUNT_OUT_OF_RANGE]

    def test_too_many_tags_is_flagged_not_rejected(self):
        self.valid["tags"] = [f"tag-{i}" for i in range(10)]

        result = parse_category_response(json.dumps(self.valid))

        assert result.ok
        assert len(result.value.tags) == 10
        assert ParseWarnings.TAG_COUNT_OUT_OF_RANGE in result.warnings

    def test_duplicate_tags_are_dropped_in_order(self):
        self.valid["tags"] = ["python", "web", "python", "api"]

        result = parse_category_response(json.dumps(self.valid))

        assert result.value.tags == ["python", "web", "api"]

    def test_rejects_section_type_label(self):
        """Explanation is a section type, not a note category."""
        self.valid["type"] = "Explanation"

        result = parse_category_response(json.dumps(self.valid))

        assert result.field == "type"

    def test_tags_must_be_list(self):
        self.valid["tags"] = "python, web"

        result = parse_category_response(json.dumps(self.valid))

        assert result.field == "tags"

    def test_clamps_confidence(self):
        self.valid["confidence"] = 3

        result = parse_category_response(json.dumps(self.valid))

        assert result.value.confidence == 1.0


class TestSectionDetectionResponse:
    """Test DetectSections validation."""

    def test_parses_sections_with_timing(self):
        raw = json.dumps({
            "summary": "A video about containers.",
            "tags": ["docker"],
            "sections": [
                {"title": "Intro", "summary": "Welcome", "bullets": ["Hi"], "startTime": 0, "endTime": 32},
                {"title": "Docker", "summary": "Containers", "bullets": [], "startTime": 32, "endTime": 90},
            ]
        })

        result = parse_section_detection_response(raw)

        assert result.ok
        assert result.value.summary == "A video about containers."
        assert [s.title for s in result.value.sections] == ["Intro", "Docker"]
        assert result.value.sections[1].start_time == 32.0
        assert result.value.sections[1].end_time == 90.0

    def test_summary_and_tags_are_optional(self):
        raw = '{"sections": [{"title": "T", "summary": "S", "bullets": []}]}'

        result = parse_section_detection_response(raw)

        assert result.ok
        assert result.value.summary == ""
        assert result.value.tags == []
        assert result.value.sections[0].start_time is None

    def test_names_offending_section_field(self):
        raw = '{"sections": [{"title": "T", "summary": "S", "bullets": []}, {"title": "U", "bullets": []}]}'

        result = parse_section_detection_response(raw)

        assert result.kind == FailureKind.SCHEMA_VIOLATION
        assert result.field == "sections.1.summary"

    def test_missing_sections(self):
        result = parse_section_detection_response('{"summary": "x"}')

        assert result.field == "sections"

    def test_non_numeric_start_time(self):
        raw = '{"sections": [{"title": "T", "summary": "S", "bullets": [], "startTime": "0:32"}]}'

        result = parse_section_detection_response(raw)

        assert result.field == "sections.0.startTime"

    def test_huge_end_time(self):
        raw = '{"sections": [{"title": "T", "summary": "S", "bullets": [], "endTime": 9' + '9' * 400 + '}]}'

        result = parse_section_detection_response(raw)

        assert result.kind == FailureKind.SCHEMA_VIOLATION
        assert result.field == "sections.0.endTime"

    def test_bare_array_is_the_sections_list(self):
        raw = (
            'Here you go:\n'
            '[{"title": "Intro", "summary": "S", "bullets": [], "startTime": 0}, '
            '{"title": "Outro", "summary": "S", "bullets": []}]'
        )

        result = parse_section_detection_response(raw)

        assert result.ok
        assert [s.title for s in result.value.sections] == ["Intro", "Outro"]
        assert result.value.summary == ""
        assert result.value.tags == []

    def test_object_with_nested_arrays_is_not_mistaken_for_bare_array(self):
        raw = '{"tags": ["docker"], "sections": [{"title": "T", "summary": "S", "bullets": ["b"]}]}'

        result = parse_section_detection_response(raw)

        assert result.ok
        assert result.value.tags == ["docker"]


class TestTextResponse:
    """Test plain-text responses."""

    def test_strips_whitespace(self):
        result = parse_text_response("  A short summary.\n")

        assert result.ok
        assert result.value == "A short summary."

    @pytest.mark.parametrize("raw", ["", "   \n", None])
    def test_blank_is_malformed(self, raw):
        result = parse_text_response(raw)

        assert result.kind == FailureKind.MALFORMED_RESPONSE
