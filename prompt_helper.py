# prompt_helper.py — assemble the system prompt for one chat turn
import os
from typing import List, Optional

from site_cache import Selection, topic_label

ASSISTANT_NAME = os.getenv("ASSISTANT_NAME", "Ana")
BUSINESS_NAME = os.getenv("BUSINESS_NAME", "our online store")

SECTION_CHAR_LIMIT = 6000
FALLBACK_SENTENCE = "I'm sorry — the website does not provide this information."


def _preamble(assistant: str, business: str) -> str:
    return (
        f"You are {assistant}, the customer support assistant for {business}. "
        "Answer ONLY using the information supplied below; do not invent policies, prices or dates. "
        "Be concise and friendly."
    )


def build_system_prompt(base_context: str,
                        selection: Optional[Selection] = None,
                        assistant: str = ASSISTANT_NAME,
                        business: str = BUSINESS_NAME) -> str:
    """Pure function: (business context, selected page excerpt) -> system prompt.

    A selection with empty text counts as no selection and yields the fallback
    instruction instead of a website section.
    """
    parts: List[str] = [_preamble(assistant, business)]
    parts.append(f"--- General business context ---\n{base_context or ''}")

    if selection is not None and selection.text:
        excerpt = selection.text[:SECTION_CHAR_LIMIT]
        parts.append(
            f"--- Website section: {topic_label(selection.topic)} ---\n"
            f"Source: {selection.url}\n"
            f"{excerpt}"
        )
        parts.append(
            "If your answer uses information from the website section above, "
            f"end it with the source link: {selection.url}"
        )
    else:
        parts.append(
            "If the answer is not covered by the business context above, "
            f'reply with exactly this sentence: "{FALLBACK_SENTENCE}"'
        )

    return "\n\n".join(parts)
