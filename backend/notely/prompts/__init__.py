"""
Centralized prompt builders for every section transformation.

Every builder is pure: the same input always yields the same prompt text.
"""
from notely.prompts.summary_prompts import build_summary_prompt
from notely.prompts.section_prompts import (
    build_regenerate_section_prompt,
    build_section_detection_prompt,
    build_section_detection_with_timestamps_prompt,
)
from notely.prompts.classification_prompts import (
    build_category_prompt,
    build_section_type_prompt,
)
from notely.prompts.language_prompts import build_language_transform_prompt
from notely.prompts.inline_prompts import build_inline_action_prompt

__all__ = [
    # Summary
    "build_summary_prompt",
    # Section regeneration / detection
    "build_regenerate_section_prompt",
    "build_section_detection_prompt",
    "build_section_detection_with_timestamps_prompt",
    # Classification
    "build_section_type_prompt",
    "build_category_prompt",
    # Language transformation
    "build_language_transform_prompt",
    # Inline actions
    "build_inline_action_prompt",
]
