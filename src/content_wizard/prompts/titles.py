"""Title and caption prompts.

Every variant ends with the numbered-list contract, because the reply is read
back with ``parse_numbered_list`` and nothing else.
"""

from __future__ import annotations

from datetime import date

from content_wizard.constants import DEFAULT_CHAR_LIMIT, PLATFORM_LIMITS, VIDEO_LIMITS
from content_wizard.models import (
    ContentType,
    EmailSequenceMeta,
    Platform,
    ServicePageMeta,
)


def target_year(today: date | None = None) -> int:
    """The year titles should mention; from October on, that is next year."""
    today = today or date.today()
    return today.year + 1 if today.month >= 10 else today.year


def numbered_contract(count: int, noun: str = "titles") -> str:
    example = "\n".join(f"{i}. {noun[:-1].capitalize()} {i} here" for i in range(1, count + 1))
    return f"""Format your response EXACTLY like this:
{example}

CRITICAL:
- Return EXACTLY {count} numbered {noun}
- Use numbers and periods exactly as shown above
- Do not include any other text or explanation
- Each one must be unique and relevant"""


def _caption_prompt(topic: str, platform: Platform | None, count: int) -> str:
    name = platform.value if platform else "social media"
    limit = PLATFORM_LIMITS.get(platform, {}).get("chars", DEFAULT_CHAR_LIMIT)
    extras = {
        Platform.TWITTER_X: "- Keep within 280 characters",
        Platform.INSTAGRAM: "- Optimize for visual content reference",
        Platform.LINKEDIN: "- Maintain professional tone",
    }.get(platform, "")

    return f"""Generate {count} engaging {name} post captions about "{topic}":

Requirements:
- Follow {name} best practices and keep each caption under {limit} characters
- Include 2-3 relevant emojis strategically placed
- Start with a hook or question
- Include a clear call-to-action
- Make it conversational and engaging
{extras}

{numbered_contract(count, "captions")}
- Include emojis naturally in the flow"""


def build_title_prompt(
    content_type: ContentType,
    topic: str,
    platform: Platform | None = None,
    metadata: ServicePageMeta | EmailSequenceMeta | None = None,
    *,
    count: int = 3,
    today: date | None = None,
) -> str:
    """Build the prompt asking for ``count`` title (or caption) candidates."""
    if content_type == ContentType.SOCIAL_MEDIA_POST:
        return _caption_prompt(topic, platform, count)

    year = target_year(today)
    requirements = [
        "- Keep each title under 60 characters",
        "- Include power words (Essential, Ultimate, Proven)",
        "- Make them engaging and SEO-optimized",
        f'- Include "{year}" in at least one title',
    ]
    subject = f"a {content_type.value}"

    if content_type == ContentType.LANDING_PAGE:
        requirements.append("- Add a pipe (|) for OG title variant")
    elif content_type == ContentType.LISTICLE:
        requirements.append('- Start with a number (e.g. "10 Proven Ways...")')
    elif content_type == ContentType.RESOURCE_GUIDE:
        requirements.append('- Signal completeness (e.g. "Complete Guide", "Ultimate Resource")')
    elif content_type == ContentType.VIDEO_SCRIPT and platform:
        subject = f"a {platform.value} video"
        limits = VIDEO_LIMITS.get(platform)
        if limits:
            requirements.append(
                f"- Suit a {limits['min_length']}-{limits['max_length']} minute video"
            )
        requirements.append(f"- Follow {platform.value} best practices")
    elif content_type == ContentType.EMAIL_SEQUENCE and isinstance(metadata, EmailSequenceMeta):
        subject = f"a {metadata.email_count}-email sequence"
        if metadata.target_audience:
            requirements.append(f"- Speak directly to: {metadata.target_audience}")
    elif content_type == ContentType.SERVICE_PAGE and isinstance(metadata, ServicePageMeta):
        if metadata.business_name:
            requirements.append(f'- Mention the business name "{metadata.business_name}" in at least one title')
        if metadata.uses_location and metadata.location:
            requirements.append(f'- Include the location "{metadata.location.display()}" in at least one title')

    return f"""Generate exactly {count} engaging titles for {subject} about "{topic}".

Requirements:
{chr(10).join(requirements)}

{numbered_contract(count)}
- First title MUST include the year {year}"""
