"""
Centralized constants for the application.
"""


# AI Model defaults
class AIModels:
    """Default AI model configurations."""
    TRANSFORM_MODEL = "gpt-4o-mini"
    CLASSIFY_MODEL = "gpt-3.5-turbo"


class AIParams:
    """Sampling parameters for the single generate() call."""
    TEMPERATURE = 0.3
    MAX_TOKENS = 2000


class TagLimits:
    """Tag count bounds for whole-note categorization."""
    MIN_TAGS = 3
    MAX_TAGS = 8
    TAG_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"


class PipelineLimits:
    """Concurrency limits for batch section operations."""
    MAX_PARALLEL_SECTIONS = 4


class ParseWarnings:
    """Warning codes attached to successful but flagged parse results."""
    TAG_COUNT_OUT_OF_RANGE = "tag_count_out_of_range"


MARKDOWN_TITLE = "# Notes"
MARKDOWN_EMPTY_NOTICE = "No sections available."
UNTITLED_SECTION = "Untitled Section"
