"""Full-draft prompts: turn the approved outline into HTML content."""

from __future__ import annotations

from typing import Sequence

from content_wizard.constants import (
    ALLOWED_CONTENT_TAGS,
    DEFAULT_CHAR_LIMIT,
    DEFAULT_HASHTAG_LIMIT,
    PLATFORM_LIMITS,
    VIDEO_LIMITS,
)
from content_wizard.models import (
    ContentType,
    EmailSequenceMeta,
    NodeKind,
    OutlineNode,
    Platform,
    ServicePageMeta,
)

CONTENT_SYSTEM = """Create high-quality, engaging content that is:
1. Well-structured with proper HTML tags
2. SEO-optimized
3. Audience-focused
4. Clear and concise
5. Properly formatted"""

_PREFIX = {
    NodeKind.H1: "[H1]",
    NodeKind.H2: "[H2]",
    NodeKind.H3: "[H3]",
    NodeKind.LIST: "[LIST]",
    NodeKind.CTA: "[CTA]",
}


def render_outline(outline: Sequence[OutlineNode]) -> str:
    """Write an outline back out in the bracket-tag form the model knows."""
    lines = []
    for node in outline:
        if node.kind == NodeKind.H1 and lines:
            lines.append("")
        lines.append(f"{_PREFIX[node.kind]} {node.text}".rstrip())
        lines.extend(f"- {item}" for item in node.children)
    return "\n".join(lines)


def _html_rules() -> str:
    tags = ", ".join(f"<{tag}>" for tag in ALLOWED_CONTENT_TAGS)
    return f"""HTML rules:
- Use only these tags: {tags}
- One <h1> for the title, <h2>/<h3> for sections
- Wrap every paragraph in <p>
- No <html>, <head>, <body>, markdown or code fences
- Return only the HTML content, with no commentary"""


def build_content_prompt(
    content_type: ContentType,
    topic: str,
    title: str,
    outline: Sequence[OutlineNode],
    keywords: Sequence[str] = (),
    platform: Platform | None = None,
    metadata: ServicePageMeta | EmailSequenceMeta | None = None,
    *,
    min_words: int | None = None,
) -> str:
    """Build the prompt that drafts the final piece from its outline.

    ``min_words`` is stated for long-form types; the gateway enforces it.
    """
    requirements = ["- Follow the outline section by section, in order"]
    if keywords:
        requirements.append(f"- Use these keywords naturally: {', '.join(keywords)}")

    if content_type == ContentType.SOCIAL_MEDIA_POST:
        limits = PLATFORM_LIMITS.get(platform, {})
        name = platform.value if platform else "social media"
        requirements += [
            f"- Write a single {name} post",
            f"- Stay under {limits.get('chars', DEFAULT_CHAR_LIMIT)} characters",
            f"- End with at most {limits.get('hashtags', DEFAULT_HASHTAG_LIMIT)} hashtags",
            "- Wrap each paragraph in <p>; no headings",
        ]
        html = "Return only the post as <p> paragraphs, with no commentary."
    else:
        html = _html_rules()

    if content_type == ContentType.EMAIL_SEQUENCE and isinstance(metadata, EmailSequenceMeta):
        requirements.append(
            f"- Write all {metadata.email_count} emails, each under an <h2> with its subject line"
        )
        if metadata.target_audience:
            requirements.append(f"- Speak to: {metadata.target_audience}")
    elif content_type == ContentType.VIDEO_SCRIPT:
        limits = VIDEO_LIMITS.get(platform)
        if limits:
            requirements.append(
                f"- Script for a {limits['min_length']}-{limits['max_length']} minute video"
            )
        requirements.append("- Mark visuals in <em> and spoken lines in <p>")
    elif content_type == ContentType.SERVICE_PAGE and isinstance(metadata, ServicePageMeta):
        if metadata.business_name:
            requirements.append(f"- Write as {metadata.business_name}, in the first person plural")
        if metadata.uses_location and metadata.location:
            requirements.append(f"- Mention {metadata.location.display()} where it fits")
        if metadata.service_areas:
            requirements.append(f"- Name the areas served: {', '.join(metadata.service_areas)}")

    if min_words:
        requirements.append(f"- The content MUST contain at least {min_words} words")

    return f"""Write the complete {content_type.value} titled "{title}" about {topic}.

Outline:
{render_outline(outline)}

Requirements:
{chr(10).join(requirements)}

{html}"""
