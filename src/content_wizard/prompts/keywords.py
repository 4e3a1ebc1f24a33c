"""Keyword, hashtag and LSI expansion prompts (comma-list replies)."""

from __future__ import annotations

from datetime import date

from content_wizard.constants import DEFAULT_HASHTAG_LIMIT, PLATFORM_LIMITS
from content_wizard.models import Location, Platform

COMMA_CONTRACT = "Output as comma-separated list"
HASHTAG_CONTRACT = "Output as comma-separated list with # prefix"


def _hashtag_limit(platform: Platform | None) -> int:
    return PLATFORM_LIMITS.get(platform, {}).get("hashtags", DEFAULT_HASHTAG_LIMIT)


def build_keyword_prompt(
    topic: str,
    platform: Platform | None = None,
    *,
    count: int = 7,
    today: date | None = None,
) -> str:
    """Ask for starter keywords, or hashtags for social platforms."""
    if platform and platform.is_social:
        return f"""Generate relevant hashtags for {platform.value} post about "{topic}":
- Mix trending and niche tags
- Include brand-relevant tags
- Maximum {_hashtag_limit(platform)} hashtags
- Follow {platform.value} best practices
- Include a mix of industry-specific, campaign-related, trending and brand-specific tags

{HASHTAG_CONTRACT}"""

    year = (today or date.today()).year
    return f"""Generate {count} SEO keywords for "{topic}" including:
- {year} versions
- Long-tail phrases
- Common variations

{COMMA_CONTRACT}"""


def build_lsi_prompt(
    keywords: list[str],
    platform: Platform | None = None,
    *,
    count: int = 15,
    location: Location | None = None,
) -> str:
    """Ask for related (LSI) keywords, or extra hashtags for social platforms."""
    joined = ", ".join(keywords)
    if platform and platform.is_social:
        return f"""Generate additional hashtags related to: {joined}
- Mix trending and niche tags
- Relevant to {platform.value} audience
- Maximum {_hashtag_limit(platform)} suggestions
- Include popular variations
- Focus on related industry terms, similar campaign types, complementary topics and audience interests

{HASHTAG_CONTRACT}"""

    local = ""
    if location:
        local = f"- Include location-specific variations for {location.display()}\n"

    return f"""Generate exactly {count} LSI keywords and phrases related to: {joined}
- Include semantic variations and related terms
- Mix of short-tail and long-tail phrases
- Focus on high-search-volume terms
- Ensure relevance to main topic
- Avoid exact matches to the original keywords
{local}- Mix of broad and specific phrases

Output EXACTLY {count} unique keywords/phrases as comma-separated list.
Do not number the items.
Do not include the original keywords."""
