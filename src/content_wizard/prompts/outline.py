"""Outline prompts.

Everything except Social Media Post asks for bracket-tag markup read back with
``parse_bracket_outline``; the social variant asks for a literal JSON plan read
with ``parse_json_outline``. The CRITICAL marker block is part of every
bracket variant.
"""

from __future__ import annotations

from content_wizard.constants import VIDEO_LIMITS
from content_wizard.models import (
    ContentType,
    EmailSequenceMeta,
    Platform,
    ServicePageMeta,
)

OUTLINE_SYSTEM = "You are a content strategist specializing in creating well-structured content outlines."

MARKER_CONTRACT = """CRITICAL:
- Use ONLY these prefixes: [H1], [H2], [LIST], [CTA]
- [H1] for main sections
- [H2] for subsections
- [LIST] followed by bullet points starting with "-"
- [CTA] for call-to-actions
- Each section must start with [H1]
- Keep hierarchy consistent
- Do not include any other formatting or text"""

_DEFAULT_FORMAT = """[H1] Introduction
[H2] Hook Statement
[LIST]
- Key problem point
- Current market situation
- Reader's pain points

[H1] [Section Title]
[H2] Main Point
[LIST]
- Supporting detail
- Example or case study
- Statistical evidence"""


def _keyword_line(keywords) -> str:
    keywords = [k for k in keywords if k]
    if not keywords:
        return ""
    return f"- Work these keywords into the section headings naturally: {', '.join(keywords)}\n"


# ── Variants ──────────────────────────────────────────────────────────


def _social_outline(topic: str, title: str, platform: Platform | None) -> str:
    name = platform.value if platform else "social media"
    return f"""Create {name} post structure for "{title}" about "{topic}":

Requirements:
- Follow {name} best practices
- Include all necessary components
- Optimize for engagement

Format your response as a JSON structure:
{{
  "platform": "{name}",
  "structure": {{
    "hook": "Opening hook or question",
    "body": "Main message/value proposition",
    "details": ["Supporting point", "Feature or benefit"],
    "cta": "Call to action",
    "media": ["[IMAGE 1: Description]", "[VIDEO: Description]"],
    "hashtags": "Hashtag placement strategy"
  }}
}}

Return ONLY the JSON object, with no commentary or code fences."""


def _email_outline(topic: str, title: str, meta: EmailSequenceMeta | None) -> str:
    count = meta.email_count if meta else 1
    audience = f"\n- Written for: {meta.target_audience}" if meta and meta.target_audience else ""
    example = "\n\n".join(
        f"""[H1] Email {n}: [Subject Line]
[H2] Opening
[LIST]
- Key message
- Value for the reader
[CTA] [Email {n} call to action]"""
        for n in (1, 2)
    )
    return f"""Create a detailed outline for a {count}-email sequence titled "{title}" about {topic}.

Requirements:
- Exactly {count} emails, no more and no fewer
- Each email builds on the previous one{audience}
- Every email ends with one clear call to action

Format your response in this EXACT structure:
{example}

{MARKER_CONTRACT}
- Write EXACTLY {count} [H1] sections, from Email 1 to Email {count}"""


def _video_outline(topic: str, title: str, platform: Platform | None) -> str:
    name = platform.value if platform else "video"
    limits = VIDEO_LIMITS.get(platform)
    length = f"\n- Fit a {limits['min_length']}-{limits['max_length']} minute runtime" if limits else ""
    return f"""Create a detailed outline for a {name} video script titled "{title}" about {topic}.

Requirements:
- Open with a hook in the first few seconds
- Break the script into 3-6 scenes{length}
- Note visuals or b-roll for each scene
- Close with a call to action

Format your response in this EXACT structure:
[H1] Hook
[H2] Opening line
[LIST]
- Visual: what is on screen
- Script beat

[H1] Scene 1: [Scene Title]
[H2] Main Point
[LIST]
- Visual: what is on screen
- Script beat

[CTA] [Closing call to action]

{MARKER_CONTRACT}"""


def _listicle_outline(topic: str, title: str, keywords) -> str:
    return f"""Create a detailed outline for a Listicle titled "{title}" about {topic}.

Requirements:
- Introduce the list in one short section
- Each list item is its own numbered [H2] heading
- Give every item 2-3 supporting points
{_keyword_line(keywords)}- Finish with a short conclusion and a call to action

Format your response in this EXACT structure:
[H1] Introduction
[LIST]
- Why this list matters
- Who it is for

[H1] The List
[H2] 1. [First Item]
[LIST]
- Supporting point
- Example
[H2] 2. [Second Item]
[LIST]
- Supporting point
- Example

[H1] Conclusion
[CTA] [Call to action]

{MARKER_CONTRACT}"""


def _default_outline(
    content_type: ContentType,
    topic: str,
    title: str,
    metadata: ServicePageMeta | EmailSequenceMeta | None,
    keywords,
) -> str:
    context = ""
    if isinstance(metadata, ServicePageMeta):
        if metadata.business_name:
            context += f"- Present the services of {metadata.business_name}\n"
        if metadata.uses_location and metadata.location:
            context += f"- Include local sections for {metadata.location.display()}\n"
        if metadata.target_audience:
            context += f"- Written for: {metadata.target_audience}\n"

    return f"""Create a detailed outline for {content_type.value} titled "{title}" about {topic}.

Requirements:
- Include 5-8 main sections
- Each section must have 2-4 subsections or points
- Include a mix of different content types (headings, lists, CTAs)
- Maintain logical flow
- Focus on value delivery
{context}{_keyword_line(keywords)}
Format your response in this EXACT structure:
{_DEFAULT_FORMAT}

{MARKER_CONTRACT}"""


def build_outline_prompt(
    content_type: ContentType,
    topic: str,
    title: str,
    platform: Platform | None = None,
    metadata: ServicePageMeta | EmailSequenceMeta | None = None,
    keywords=(),
) -> str:
    """Build the outline prompt for a content type.

    Args:
        content_type: Selects the reply grammar and phrasing.
        topic: What the piece is about.
        title: The chosen title.
        platform: Social or video platform, where the type has one.
        metadata: Service Page or Email Sequence details.
        keywords: Selected keywords to work into headings.

    Returns:
        The prompt text, always ending with its reply-format contract.
    """
    if content_type == ContentType.SOCIAL_MEDIA_POST:
        return _social_outline(topic, title, platform)
    if content_type == ContentType.EMAIL_SEQUENCE:
        meta = metadata if isinstance(metadata, EmailSequenceMeta) else None
        return _email_outline(topic, title, meta)
    if content_type == ContentType.VIDEO_SCRIPT:
        return _video_outline(topic, title, platform)
    if content_type == ContentType.LISTICLE:
        return _listicle_outline(topic, title, keywords)
    return _default_outline(content_type, topic, title, metadata, keywords)
