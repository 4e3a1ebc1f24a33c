"""Platform limits, generation defaults and SEO scoring rules."""

from content_wizard.models import Platform

# ---------------------------------------------------------------------------
# Platform limits
# ---------------------------------------------------------------------------
PLATFORM_LIMITS = {
    Platform.INSTAGRAM: {"chars": 2200, "hashtags": 5},
    Platform.TWITTER_X: {"chars": 280, "hashtags": 5},
    Platform.LINKEDIN: {"chars": 3000, "hashtags": 5},
    Platform.FACEBOOK: {"chars": 63206, "hashtags": 5},
    Platform.PINTEREST: {"chars": 500, "hashtags": 5},
    Platform.THREADS: {"chars": 500, "hashtags": 5},
}

# Video lengths in minutes
VIDEO_LIMITS = {
    Platform.YOUTUBE: {"min_length": 3, "max_length": 15},
    Platform.TIKTOK: {"min_length": 0.5, "max_length": 3},
    Platform.EXPLAINER: {"min_length": 1, "max_length": 5},
}

SOCIAL_PLATFORMS = tuple(PLATFORM_LIMITS)
VIDEO_PLATFORMS = tuple(VIDEO_LIMITS)

DEFAULT_CHAR_LIMIT = 280
DEFAULT_HASHTAG_LIMIT = 5

# ---------------------------------------------------------------------------
# Generation defaults
# ---------------------------------------------------------------------------
GENERATION_DEFAULTS = {
    "temperature": 0.7,
    "max_tokens": 6000,
    "outline_max_tokens": 1000,
    "enhance_max_tokens": 1000,
    "insert_max_tokens": 2000,
    "min_content_words": 1200,
    "content_max_attempts": 2,
    "lsi_keyword_count": 15,
    "seo_keyword_count": 7,
    "title_count": 3,
    "max_selected_keywords": 10,
}

ALLOWED_CONTENT_TAGS = ["h1", "h2", "h3", "p", "ul", "ol", "li", "strong", "em", "a", "div", "hr"]

# ---------------------------------------------------------------------------
# SEO Standards
# ---------------------------------------------------------------------------
SEO_STANDARDS = {
    "words_per_minute": 200,
    "target_word_count": 800,
    "long_paragraph_chars": 300,
    "flesch_floor": 30,
    "flesch_ceiling": 70,
    "ideal_keyword_density": 3.0,
    "keyword_overuse_penalty": 4.0,
    "title_ideal": (50, 60),
    "title_acceptable": (40, 70),
    "meta_description_ideal": (150, 160),
    "meta_description_acceptable": (120, 180),
    "meta_description_max_chars": 160,
}
