"""
Prompts for classifying a section's content type and a note's category.
"""
from typing import Sequence

from notely.schemas.section import Category, Section, SectionType

SECTION_TYPE_DESCRIPTIONS = {
    SectionType.TUTORIAL: "Step-by-step instructions, how-to guides, walkthroughs",
    SectionType.INTERVIEW: "Q&A format, conversations, questions and answers",
    SectionType.LECTURE: "Educational content, teaching, explanations of concepts",
    SectionType.REVIEW: "Product/service evaluation, pros/cons, recommendations",
    SectionType.EXPLANATION: "Concept definitions, theory, background information",
    SectionType.STORY: "Narrative content, personal accounts, anecdotes",
    SectionType.DISCUSSION: "Analysis, debate, multiple perspectives",
    SectionType.OTHER: "Doesn't fit any category above",
}

CATEGORY_DESCRIPTIONS = {
    Category.TUTORIAL: "how-to, step-by-step guides",
    Category.INTERVIEW: "conversations, Q&A",
    Category.LECTURE: "educational, academic",
    Category.REVIEW: "product/service reviews",
    Category.DOCUMENTARY: "informational, factual",
    Category.PODCAST: "discussions, conversations",
    Category.NEWS: "current events, reporting",
    Category.ENTERTAINMENT: "comedy, gaming, vlogs",
    Category.TECHNICAL: "coding, engineering, technical deep-dives",
    Category.BUSINESS: "entrepreneurship, finance, strategy",
    Category.OTHER: "anything that fits none of the above",
}

SECTION_TYPE_PROMPT_TEMPLATE = """You are analyzing a section of video content to determine its type.

Section Content:
Title: {title}
Summary: {summary}
Key Points: {key_points}

Determine the section type (choose exactly ONE that best fits):

{label_lines}

Return ONLY valid JSON in this exact format:
{{
  "type": "Tutorial",
  "confidence": 0.9
}}

"type" must be one of: {label_list}. "confidence" is a number between 0 and 1.
Do not include any explanation or markdown formatting, only the JSON object."""

CATEGORY_PROMPT_TEMPLATE = """You are analyzing video content to categorize it intelligently.

Video Content:
{sections_text}

Analyze this content and determine:

1. **Primary Category** - The main type of content (choose exactly ONE):
{label_lines}

2. **Tags** - Extract 3-8 relevant tags that describe:
   - Main topics covered
   - Key themes
   - Subject areas
   - Technical domains
   - Use lowercase, hyphenated format (e.g., "machine-learning", "product-management")

3. **Confidence** - How confident are you in this categorization? (0.0 to 1.0)

Return ONLY valid JSON in this exact format:
{{
  "type": "Tutorial",
  "tags": ["react", "web-development", "tutorial"],
  "confidence": 0.95
}}

Do not include any explanation or markdown formatting, only the JSON object."""


def format_section_block(index: int, section: Section) -> str:
    """Render one section as ``Section i: ...`` for the category prompt (1-based)."""
    return (
        f"Section {index}: {section.title}\n"
        f"Summary: {section.summary}\n"
        f"Points: {', '.join(section.bullets)}"
    )


def build_section_type_prompt(section: Section) -> str:
    label_lines = "\n".join(
        f"- {label.value}: {description}"
        for label, description in SECTION_TYPE_DESCRIPTIONS.items()
    )
    return SECTION_TYPE_PROMPT_TEMPLATE.format(
        title=section.title,
        summary=section.summary,
        key_points=", ".join(section.bullets),
        label_lines=label_lines,
        label_list=", ".join(SectionType.labels())
    )


def build_category_prompt(sections: Sequence[Section]) -> str:
    sections_text = "\n\n".join(
        format_section_block(i + 1, section) for i, section in enumerate(sections)
    )
    label_lines = "\n".join(
        f"   - {label.value} ({description})"
        for label, description in CATEGORY_DESCRIPTIONS.items()
    )
    return CATEGORY_PROMPT_TEMPLATE.format(
        sections_text=sections_text,
        label_lines=label_lines
    )
