"""Resolve any (content type, step) pair to a model prompt."""

from __future__ import annotations

from datetime import date

from content_wizard.models import Session, Step
from content_wizard.prompts.content import CONTENT_SYSTEM, build_content_prompt
from content_wizard.prompts.keywords import build_keyword_prompt, build_lsi_prompt
from content_wizard.prompts.outline import OUTLINE_SYSTEM, build_outline_prompt
from content_wizard.prompts.titles import build_title_prompt

GENERIC_PROMPT = """Help with the "{step}" step of a {content_type} about "{topic}".

Requirements:
- Keep it relevant to the topic
- Be specific and actionable

Output as comma-separated list"""


def build_step_prompt(
    step: Step,
    session: Session,
    *,
    title_count: int = 3,
    lsi_count: int = 15,
    min_words: int | None = None,
    today: date | None = None,
) -> tuple[str, str | None]:
    """Return ``(prompt, system_instruction)`` for generating ``step``'s data.

    Steps without a specialised builder get the generic template, so every
    pair resolves to some prompt.
    """
    if session.content_type is None:
        raise ValueError("No content type selected")

    content_type = session.content_type
    platform = session.platform
    keywords = session.selected_keywords or session.keywords

    if step == Step.TITLE:
        prompt = build_title_prompt(
            content_type, session.topic, platform, session.metadata,
            count=title_count, today=today,
        )
        return prompt, None

    if step == Step.KEYWORDS or step == Step.HASHTAGS:
        return build_keyword_prompt(session.topic, platform, today=today), None

    if step == Step.LSI:
        location = None
        meta = session.metadata
        if meta is not None and meta.kind == "service_page" and meta.uses_location:
            location = meta.location
        return build_lsi_prompt(session.keywords, platform, count=lsi_count, location=location), None

    if step == Step.OUTLINE:
        prompt = build_outline_prompt(
            content_type, session.topic, session.title or session.topic,
            platform, session.metadata, keywords,
        )
        return prompt, OUTLINE_SYSTEM

    if step == Step.CONTENT:
        prompt = build_content_prompt(
            content_type, session.topic, session.title or session.topic, session.outline,
            keywords, platform, session.metadata, min_words=min_words,
        )
        return prompt, CONTENT_SYSTEM

    return GENERIC_PROMPT.format(
        step=step.value, content_type=content_type.value, topic=session.topic
    ), None
