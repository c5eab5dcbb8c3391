from __future__ import annotations

import logging

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown"

SYSTEM_PROMPT = (
    "You extract places from short activity descriptions. "
    "Given a task, identify the single most likely named place (if any) "
    "in {metro_area} where it happens. "
    "Reply with the place name only, no extra words. "
    'If no location is specified or implied, reply with "{unknown}".'
)


def _build_user_message(task_detail: str) -> str:
    return f'Task: "{task_detail.strip()}"'


def _clean_reply(content: str) -> str | None:
    place = content.strip().strip("\"'").strip()
    if place.endswith("."):
        place = place[:-1].rstrip()
    if not place or place.lower() == UNKNOWN_LOCATION.lower():
        return None
    return place


def resolve_location(
    task_detail: str | None,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str | None:
    """
    Ask Groq where a task most likely takes place.

    Returns the trimmed place name, or ``None`` when the model answers
    "Unknown" or on any failure (disabled, no key, timeout, API error).
    """
    if not task_detail or not task_detail.strip():
        return None

    if not config.enabled or not config.api_key:
        return None

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {
                    "role": "system",
                    "content": SYSTEM_PROMPT.format(
                        metro_area=config.metro_area, unknown=UNKNOWN_LOCATION
                    ),
                },
                {"role": "user", "content": _build_user_message(task_detail)},
            ],
            max_tokens=config.max_tokens,
            temperature=0,
        )
        content = response.choices[0].message.content or ""
    except Exception:
        logger.warning("Groq location lookup failed for task %r", task_detail, exc_info=True)
        return None

    return _clean_reply(content)
