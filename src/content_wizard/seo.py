"""SEO metrics engine: static analysis of the assembled HTML draft.

``analyze_seo_metrics`` measures, ``calculate_seo_score`` weighs. Both are
pure functions of their inputs.
"""

from __future__ import annotations

import logging
import math
import re

from bs4 import BeautifulSoup

from content_wizard.constants import SEO_STANDARDS
from content_wizard.errors import PreconditionError
from content_wizard.models import (
    HeadingDistribution,
    ImageStats,
    KeywordStat,
    LinkStats,
    ParagraphStats,
    ScoreBreakdown,
    SEOMetrics,
    SEOScore,
)

LOGGER = logging.getLogger(__name__)

_SENTENCE_RE = re.compile(r"[.!?]+")
_SILENT_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _collapse(text: str) -> str:
    return " ".join(text.split())


def extract_text(html: str) -> str:
    """Plain text of an HTML fragment, without script/style, whitespace collapsed."""
    soup = _soup(html)
    for node in soup(["script", "style"]):
        node.decompose()
    return _collapse(soup.get_text(" "))


def count_words(text: str) -> int:
    return len(text.split())


# ── Readability ───────────────────────────────────────────────────────


def count_word_syllables(word: str) -> int:
    word = re.sub(r"[^a-z]", "", word.lower())
    if len(word) <= 3:
        return 1
    word = _SILENT_SUFFIX_RE.sub("", word)
    word = re.sub(r"^y", "", word)
    return len(_VOWEL_GROUP_RE.findall(word)) or 1


def count_syllables(text: str) -> int:
    return sum(count_word_syllables(word) for word in text.split())


def calculate_flesch_score(text: str) -> float:
    """Flesch reading ease, clamped to [0, 100]; 0 for text without words."""
    words = count_words(text)
    sentences = len([s for s in _SENTENCE_RE.split(text) if s.strip()])
    if words == 0 or sentences == 0:
        return 0.0
    syllables = count_syllables(text)
    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)
    return max(0.0, min(100.0, score))


# ── Keywords ──────────────────────────────────────────────────────────


def analyze_keywords(text: str, keywords: list[str], word_count: int) -> tuple[list[KeywordStat], float]:
    stats = []
    total = 0
    for keyword in keywords:
        pattern = re.compile(rf"\b{re.escape(keyword.strip())}\b", re.IGNORECASE)
        count = len(pattern.findall(text))
        total += count
        stats.append(KeywordStat(keyword=keyword, count=count, density=100 * count / word_count))
    return stats, 100 * total / word_count


# ── Metrics ───────────────────────────────────────────────────────────


def analyze_seo_metrics(
    html: str,
    keywords: list[str],
    *,
    title: str | None = None,
    meta_description: str | None = None,
) -> SEOMetrics:
    """Measure an HTML draft against its target keywords.

    Args:
        html: The assembled HTML content.
        keywords: Selected keywords; each is counted on word boundaries.
        title: Page title; defaults to the text of the first ``<h1>``.
        meta_description: Defaults to a ``<meta name="description">`` tag.

    Returns:
        The SEOMetrics for the draft.

    Raises:
        PreconditionError: For empty content, no keywords, or content
            without any words.
    """
    if not html or not html.strip():
        raise PreconditionError("Content must be a non-empty string")
    keywords = [k for k in keywords if k and k.strip()]
    if not keywords:
        raise PreconditionError("At least one keyword is required for SEO analysis")

    text = extract_text(html)
    word_count = count_words(text)
    if word_count == 0:
        raise PreconditionError("No words found in content")

    soup = _soup(html)

    if title is None:
        h1 = soup.find("h1")
        title = _collapse(h1.get_text(" ")) if h1 else ""
    if meta_description is None:
        meta = soup.find("meta", attrs={"name": "description"})
        meta_description = meta.get("content", "") if meta else ""

    headings = HeadingDistribution(**{
        f"h{level}": len(soup.find_all(f"h{level}")) for level in range(1, 7)
    })

    paragraphs = soup.find_all("p")
    long_paragraphs = sum(
        1 for p in paragraphs
        if len(_collapse(p.get_text(" "))) > SEO_STANDARDS["long_paragraph_chars"]
    )

    images = soup.find_all("img")
    with_alt = sum(1 for img in images if (img.get("alt") or "").strip())

    links = soup.find_all("a")
    external = sum(1 for a in links if (a.get("href") or "").startswith("http"))

    keyword_stats, total_density = analyze_keywords(text, keywords, word_count)

    metrics = SEOMetrics(
        title_length=len(title),
        meta_description_length=len(meta_description),
        word_count=word_count,
        reading_time=math.ceil(word_count / SEO_STANDARDS["words_per_minute"]),
        flesch_score=calculate_flesch_score(text),
        heading_distribution=headings,
        paragraph_stats=ParagraphStats(total=len(paragraphs), long_paragraphs=long_paragraphs),
        image_stats=ImageStats(total=len(images), with_alt=with_alt),
        link_stats=LinkStats(total=len(links), internal=len(links) - external, external=external),
        keyword_stats=keyword_stats,
        total_keyword_density=total_density,
    )
    LOGGER.debug("SEO metrics: %d words, density %.2f%%", word_count, total_density)
    return metrics


# ── Score ─────────────────────────────────────────────────────────────


def _round(value: float) -> int:
    return math.floor(value + 0.5)


def _in_range(value: int, bounds: tuple[int, int]) -> bool:
    return bounds[0] <= value <= bounds[1]


def calculate_seo_score(metrics: SEOMetrics) -> SEOScore:
    """Weigh metrics into five 20-point buckets and a 0-100 total."""
    content = min(20.0, metrics.word_count / SEO_STANDARDS["target_word_count"] * 20)

    floor, ceiling = SEO_STANDARDS["flesch_floor"], SEO_STANDARDS["flesch_ceiling"]
    readability = max(0.0, min(20.0, (metrics.flesch_score - floor) / (ceiling - floor) * 20))

    density = metrics.total_keyword_density
    ideal = SEO_STANDARDS["ideal_keyword_density"]
    keywords = 0.0
    if density > 0:
        if density <= ideal:
            keywords = min(20.0, density * 6.67)
        else:
            keywords = max(0.0, 20 - (density - ideal) * SEO_STANDARDS["keyword_overuse_penalty"])

    structure = 0
    if metrics.heading_distribution.h1 == 1:
        structure += 5
    if metrics.heading_distribution.h2 > 0:
        structure += 5
    if metrics.paragraph_stats.long_paragraphs == 0:
        structure += 5
    images = metrics.image_stats
    if images.total > 0 and images.with_alt == images.total:
        structure += 5

    technical = 0
    if _in_range(metrics.title_length, SEO_STANDARDS["title_ideal"]):
        technical += 7
    elif _in_range(metrics.title_length, SEO_STANDARDS["title_acceptable"]):
        technical += 4
    if _in_range(metrics.meta_description_length, SEO_STANDARDS["meta_description_ideal"]):
        technical += 7
    elif _in_range(metrics.meta_description_length, SEO_STANDARDS["meta_description_acceptable"]):
        technical += 4
    if metrics.link_stats.internal > 0:
        technical += 3
    if metrics.link_stats.external > 0:
        technical += 3

    return SEOScore(
        total=_round(content + readability + keywords + structure + technical),
        breakdown=ScoreBreakdown(
            content=_round(content),
            readability=_round(readability),
            keywords=_round(keywords),
            structure=structure,
            technical=technical,
        ),
    )


# ── Meta description ──────────────────────────────────────────────────


def derive_meta_description(html: str, max_chars: int | None = None) -> str:
    """First paragraph of a draft, cut at a word boundary to ``max_chars``."""
    max_chars = max_chars or SEO_STANDARDS["meta_description_max_chars"]
    soup = _soup(html)
    for p in soup.find_all("p"):
        text = _collapse(p.get_text(" "))
        if text:
            break
    else:
        text = extract_text(html)

    if len(text) <= max_chars:
        return text
    window = text[:max_chars + 1]
    cut = window.rsplit(" ", 1)[0] if " " in window else text[:max_chars]
    return cut.rstrip(" ,;:")
