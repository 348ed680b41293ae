"""
Prompts for regenerating a single section and for splitting a transcript
into sections.
"""
import math
from typing import Sequence

from notely.schemas.section import Section, TranscriptSegment

SECTION_OUTPUT_FORMAT = """{
  "title": string,
  "summary": string,
  "bullets": string[]
}"""

REGENERATE_SECTION_PROMPT_TEMPLATE = '''
You are regenerating ONE section of notes from a YouTube video.

Rules:
- Focus ONLY on this section's topic
- Do NOT introduce new topics
- Improve clarity and structure
- Keep it concise
- Return ONLY valid JSON with exactly the keys "title", "summary" and "bullets"
- Do NOT include explanations or any text outside the JSON

Output format:
{output_format}

Current section:
{section_json}

Full transcript (for context):
"""
{transcript}
"""
'''

SECTION_DETECTION_PROMPT_TEMPLATE = '''You are given a cleaned transcript of a YouTube video.

Your task:
- Identify major topic changes
- Break the transcript into logical sections
- Each section must represent one clear idea
- Estimate timestamps for each section based on content flow

Rules:
- Return ONLY valid JSON
- Do NOT include explanations
- Do NOT add information not present in the transcript
- Be concise and factual
- Timestamps should be in seconds (integers)
- Estimate timestamps based on typical speech pace (~150 words/min)

JSON format:
{{
  "sections": [
    {{
      "title": string,
      "summary": string,
      "bullets": string[],
      "startTime": number,
      "endTime": number
    }}
  ]
}}

Transcript:
"""
{transcript}
"""
'''

SECTION_DETECTION_TIMESTAMPS_PROMPT_TEMPLATE = """Analyze this YouTube video transcript.

VIDEO DURATION: {video_duration} seconds

TRANSCRIPT (format: [second] text):
{timestamped_text}

INSTRUCTIONS:
1. Group the transcript into 3-6 logical sections based on topic changes
2. For each section, use the [second] value from the FIRST line of that section as startTime
3. endTime = startTime of next section (or {video_duration} for last section)
4. Include a "summary" field with 2-3 sentences summarizing the entire video
5. Include a "tags" array with 3-5 relevant topic tags (lowercase, hyphenated like "docker", "web-development", "machine-learning")

EXAMPLE: If section starts at "[32] docker containers..." then startTime = 32

Return ONLY this exact JSON structure (no other text):
{{
  "summary": "A 2-3 sentence summary of the entire video content.",
  "tags": ["topic1", "topic2", "topic3"],
  "sections": [
    {{
      "title": "Section Title",
      "summary": "Brief summary of this section",
      "bullets": ["key point 1", "key point 2"],
      "startTime": 0,
      "endTime": 32
    }}
  ]
}}

CRITICAL: Response MUST be a JSON object with "summary", "tags", and "sections" keys."""


def build_regenerate_section_prompt(section: Section, transcript: str) -> str:
    """Embed the current section as JSON and the full, untruncated transcript."""
    return REGENERATE_SECTION_PROMPT_TEMPLATE.format(
        output_format=SECTION_OUTPUT_FORMAT,
        section_json=section.to_json(),
        transcript=transcript
    )


def build_section_detection_prompt(transcript: str) -> str:
    return SECTION_DETECTION_PROMPT_TEMPLATE.format(transcript=transcript)


def build_section_detection_with_timestamps_prompt(
    segments: Sequence[TranscriptSegment]
) -> str:
    """Prompt with one ``[second] text`` line per segment.

    Raises:
        ValueError: If ``segments`` is empty (the duration is undefined).
    """
    if not segments:
        raise ValueError("Segments cannot be empty")

    last = segments[-1]
    video_duration = math.ceil(last.start + last.duration)

    timestamped_text = "\n".join(
        f"[{round(seg.start)}] {seg.text}" for seg in segments
    )

    return SECTION_DETECTION_TIMESTAMPS_PROMPT_TEMPLATE.format(
        video_duration=video_duration,
        timestamped_text=timestamped_text
    )
