"""
Markdown export for a finalized list of note sections.
"""
from typing import Optional, Sequence

from notely.core.constants import MARKDOWN_EMPTY_NOTICE, MARKDOWN_TITLE, UNTITLED_SECTION
from notely.schemas.section import Section


def to_markdown(sections: Optional[Sequence[Optional[Section]]]) -> str:
    """Flatten sections into a markdown document.

    Each section becomes a ``## title`` heading, its summary paragraph (if
    not blank) and one ``- `` line per non-blank bullet. None entries are
    skipped. An empty or missing list yields a fixed placeholder document.
    """
    if not sections:
        return f"{MARKDOWN_TITLE}\n\n{MARKDOWN_EMPTY_NOTICE}\n"

    parts = [f"{MARKDOWN_TITLE}\n\n"]

    for section in sections:
        if section is None:
            continue

        title = section.title if section.title and section.title.strip() else UNTITLED_SECTION
        summary = section.summary or ""
        bullets = section.bullets or []

        parts.append(f"## {title}\n\n")

        if summary.strip():
            parts.append(f"{summary}\n\n")

        for bullet in bullets:
            if bullet and bullet.strip():
                parts.append(f"- {bullet.strip()}\n")
        parts.append("\n")

    return "".join(parts)
