"""
Prompts for contextual inline rewrites of a selected piece of text.
"""
from notely.schemas.section import InlineAction

# Inline action prompts - each action has a specific instruction
INLINE_ACTION_INSTRUCTIONS = {
    InlineAction.SIMPLIFY: "Rewrite this in simpler, clearer language.",
    InlineAction.EXPAND: "Expand this with more detail, without adding new topics.",
    InlineAction.EXAMPLE: "Add a short real-world example to explain this.",
}

INLINE_ACTION_PROMPT_TEMPLATE = '''
{instruction}

Rules:
- Keep tone neutral
- Do not add emojis
- Do not change meaning
- Output only the rewritten text
- No markdown formatting
- No headings

Text:
"""
{text}
"""
'''


def build_inline_action_prompt(action: InlineAction, text: str) -> str:
    return INLINE_ACTION_PROMPT_TEMPLATE.format(
        instruction=INLINE_ACTION_INSTRUCTIONS[action],
        text=text
    )
