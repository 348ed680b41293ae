"""
Prompts for plain-prose transcript summaries.
"""

SUMMARY_PROMPT_TEMPLATE = '''You are given a transcript of a YouTube video.

Task:
- Summarize the content in clear, simple English
- Keep it concise
- Do not add extra knowledge
- Do not invent details

Transcript:
"""
{transcript}
"""
'''


def build_summary_prompt(transcript: str) -> str:
    """Prompt for a concise, grounded prose summary. Empty input is allowed."""
    return SUMMARY_PROMPT_TEMPLATE.format(transcript=transcript)
