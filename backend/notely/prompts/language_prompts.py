"""
Prompts for rewriting a section in English, Hindi or Hinglish.

Hinglish must sound like natural Indian code-mixing, never a word-by-word
translation.
"""
from notely.schemas.section import HinglishTone, Section, TargetLanguage

HINGLISH_TONE_PRESETS = {
    HinglishTone.NEUTRAL: (
        "Use balanced, clean Hinglish suitable for study notes. Mix Hindi and English naturally. "
        "Keep technical terms in English when appropriate. Example: 'Is section mein hum dekhte "
        "hain ki load balancer ka role kya hota hai aur kaise traffic distribute hota hai.'"
    ),
    HinglishTone.CASUAL: (
        "Use casual, conversational Hinglish as spoken informally. Friendly tone, slightly relaxed. "
        "Good for quick understanding. Example: 'Yahan pe basically load balancer ka role samajhte "
        "hain aur yeh traffic kaise handle karta hai.'"
    ),
    HinglishTone.INTERVIEW: (
        "Use professional Hinglish suitable for interview preparation. Emphasize key English "
        "technical terms. Clear Hindi connectors. Optimized for recall. Example: 'Is section mein "
        "load balancer ke core concepts explain kiye gaye hain jaise traffic distribution, "
        "availability, aur scalability.'"
    ),
}

ENGLISH_INSTRUCTION = "Rewrite this in clear, simple English. Make it natural and readable."

HINDI_INSTRUCTION = (
    "Rewrite this in clear, natural Hindi. Use conversational tone, avoid overly formal "
    "language. Write in Devanagari script."
)

HINGLISH_INSTRUCTION_TEMPLATE = """Rewrite this in natural Indian Hinglish. Mix Hindi and English words naturally as spoken in India. Do NOT translate word by word. Keep technical terms in English when appropriate. Sound like an Indian speaker explaining to a friend.

Tone:
{tone_preset}"""

LANGUAGE_TRANSFORM_PROMPT_TEMPLATE = """
{instruction}

Rules:
- Keep meaning exactly the same
- Keep structure (title, summary, bullets)
- Do not add new points
- Do not remove information
- Return ONLY valid JSON
- No emojis
- No explanations outside JSON

Output format:
{{
  "title": string,
  "summary": string,
  "bullets": string[]
}}

Input section:
{section_json}
"""


def language_instruction(
    target: TargetLanguage,
    tone: HinglishTone = HinglishTone.NEUTRAL
) -> str:
    """Target-specific instruction; ``tone`` only affects Hinglish."""
    if target == TargetLanguage.ENGLISH:
        return ENGLISH_INSTRUCTION
    if target == TargetLanguage.HINDI:
        return HINDI_INSTRUCTION
    if target == TargetLanguage.HINGLISH:
        return HINGLISH_INSTRUCTION_TEMPLATE.format(tone_preset=HINGLISH_TONE_PRESETS[tone])
    raise ValueError(f"Unsupported target language: {target}")


def build_language_transform_prompt(
    target: TargetLanguage,
    section: Section,
    tone: HinglishTone = HinglishTone.NEUTRAL
) -> str:
    return LANGUAGE_TRANSFORM_PROMPT_TEMPLATE.format(
        instruction=language_instruction(target, tone),
        section_json=section.to_json()
    )
