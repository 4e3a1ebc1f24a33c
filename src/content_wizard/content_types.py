"""Per-content-type configuration records driving the step machine.

Each ContentTypeConfig lists the ordered steps, the input validator for each
step, and how the outline is produced. The step machine itself has no
per-type branching beyond what is declared here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from content_wizard.constants import (
    DEFAULT_CHAR_LIMIT,
    DEFAULT_HASHTAG_LIMIT,
    GENERATION_DEFAULTS,
    PLATFORM_LIMITS,
    SOCIAL_PLATFORMS,
    VIDEO_PLATFORMS,
)
from content_wizard.models import ContentType, Platform, Session, Step, ValidationResult
from content_wizard.outline import LOCATION_FORMAT_HINT, is_valid_location

Validator = Callable[[str, Session], ValidationResult]

YES = {"yes", "y", "true", "1"}
NO = {"no", "n", "false", "0"}


class OutlineFormat(str, Enum):
    BRACKET = "bracket"
    JSON = "json"
    SERVICE_TEMPLATE = "service_template"


def split_list(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_platform(raw: str, allowed) -> Platform | None:
    value = raw.strip().lower()
    for platform in allowed:
        if platform.value.lower() == value or platform.name.lower() == value:
            return platform
    return None


def parse_yes_no(raw: str) -> bool | None:
    value = raw.strip().lower()
    if value in YES:
        return True
    if value in NO:
        return False
    return None


def char_limit(platform: Platform | None) -> int:
    return PLATFORM_LIMITS.get(platform, {}).get("chars", DEFAULT_CHAR_LIMIT)


def hashtag_limit(platform: Platform | None) -> int:
    return PLATFORM_LIMITS.get(platform, {}).get("hashtags", DEFAULT_HASHTAG_LIMIT)


# ── Validators ────────────────────────────────────────────────────────


def _ok() -> ValidationResult:
    return ValidationResult(ok=True)


def _fail(reason: str) -> ValidationResult:
    return ValidationResult(ok=False, reason=reason)


def min_length(length: int, reason: str) -> Validator:
    def validate(raw: str, session: Session) -> ValidationResult:
        return _ok() if len(raw.strip()) >= length else _fail(reason)

    return validate


def validate_keywords(raw: str, session: Session) -> ValidationResult:
    keywords = split_list(raw)
    if not keywords:
        return _fail("Please enter at least one keyword")
    if len(keywords) > 10:
        return _fail("Maximum 10 keywords allowed")
    return _ok()


def validate_title(raw: str, session: Session) -> ValidationResult:
    title = raw.strip()
    if not title:
        return _fail("Please choose or enter a title")
    if session.content_type == ContentType.LISTICLE and len(title) < 5:
        return _fail("Please enter a longer title for your listicle")
    if session.content_type == ContentType.SOCIAL_MEDIA_POST:
        limit = char_limit(session.platform)
        if len(title) > limit:
            name = session.platform.value if session.platform else "this platform"
            return _fail(f"Caption exceeds {limit} character limit for {name}")
    return _ok()


def validate_hashtags(raw: str, session: Session) -> ValidationResult:
    tags = split_list(raw)
    limit = hashtag_limit(session.platform)
    if not tags:
        return _fail("Please enter at least one hashtag")
    if len(tags) > limit:
        name = session.platform.value if session.platform else "this platform"
        return _fail(f"Maximum {limit} hashtags allowed for {name}")
    return _ok()


def validate_email_count(raw: str, session: Session) -> ValidationResult:
    try:
        count = int(raw.strip())
    except ValueError:
        return _fail("Please enter a number between 1 and 10")
    return _ok() if 1 <= count <= 10 else _fail("Please enter a number between 1 and 10")


def validate_location(raw: str, session: Session) -> ValidationResult:
    return _ok() if is_valid_location(raw) else _fail(LOCATION_FORMAT_HINT)


def validate_business_name(raw: str, session: Session) -> ValidationResult:
    name = raw.strip()
    if not 2 <= len(name) <= 100:
        return _fail("Please enter a business name between 2 and 100 characters")
    return _ok()


def validate_yes_no(raw: str, session: Session) -> ValidationResult:
    return _ok() if parse_yes_no(raw) is not None else _fail("Please answer yes or no")


def validate_service_area(raw: str, session: Session) -> ValidationResult:
    return _ok() if split_list(raw) else _fail("Please enter at least one service area")


def validate_platform(raw: str, session: Session) -> ValidationResult:
    config = CONTENT_TYPES.get(session.content_type)
    allowed = config.platforms if config else ()
    if parse_platform(raw, allowed) is None:
        names = ", ".join(p.value for p in allowed)
        return _fail(f"Please choose one of: {names}")
    return _ok()


def validate_selection(raw: str, session: Session) -> ValidationResult:
    selected = split_list(raw)
    limit = CONTENT_TYPES[session.content_type].selection_limit(session.platform)
    if not selected:
        return _fail("Please select at least one keyword")
    if len(selected) > limit:
        return _fail(f"You can select up to {limit} keywords")
    return _ok()


def validate_not_empty(raw: str, session: Session) -> ValidationResult:
    return _ok() if raw.strip() else _fail("Please enter a value")


def validate_outline(raw: str, session: Session) -> ValidationResult:
    # The outline is edited in place; the step input only confirms it
    return _ok() if session.outline else _fail("The outline is empty, add at least one section")


DEFAULT_VALIDATORS: dict[Step, Validator] = {Step.OUTLINE: validate_outline}


# ── Content-type records ──────────────────────────────────────────────


def _uses_location(session: Session) -> bool:
    meta = session.metadata
    return meta is not None and meta.kind == "service_page" and meta.uses_location


@dataclass(frozen=True)
class ContentTypeConfig:
    content_type: ContentType
    steps: tuple[Step, ...]
    validators: dict[Step, Validator]
    outline_format: OutlineFormat = OutlineFormat.BRACKET
    long_form: bool = True
    max_selected_keywords: int = GENERATION_DEFAULTS["max_selected_keywords"]
    platforms: tuple[Platform, ...] = ()
    # Steps entered only when the predicate holds for the session
    conditional: dict[Step, Callable[[Session], bool]] = field(default_factory=dict)

    @property
    def first_step(self) -> Step:
        return self.steps[0]

    def is_active(self, step: Step, session: Session) -> bool:
        condition = self.conditional.get(step)
        return condition is None or condition(session)

    def next_step(self, step: Step, session: Session) -> Step | None:
        """The next active step after ``step``, or None at the end."""
        index = self.steps.index(step)
        for candidate in self.steps[index + 1:]:
            if self.is_active(candidate, session):
                return candidate
        return None

    def selection_limit(self, platform: Platform | None = None) -> int:
        if self.content_type == ContentType.SOCIAL_MEDIA_POST:
            return hashtag_limit(platform)
        return self.max_selected_keywords

    def validator(self, step: Step) -> Validator:
        return self.validators.get(step) or DEFAULT_VALIDATORS.get(step, validate_not_empty)


_ARTICLE_STEPS = (Step.TOPIC, Step.TITLE, Step.KEYWORDS, Step.LSI, Step.OUTLINE, Step.CONTENT)
_COMMON = {
    Step.TITLE: validate_title,
    Step.KEYWORDS: validate_keywords,
    Step.LSI: validate_selection,
}
_DETAILED_TOPIC = min_length(10, "Please provide a more detailed topic description")


def _article(content_type: ContentType, topic: Validator = _DETAILED_TOPIC) -> ContentTypeConfig:
    return ContentTypeConfig(
        content_type=content_type,
        steps=_ARTICLE_STEPS,
        validators={Step.TOPIC: topic, **_COMMON},
    )


CONTENT_TYPES: dict[ContentType, ContentTypeConfig] = {
    ContentType.BLOG_POST: _article(ContentType.BLOG_POST),
    ContentType.LANDING_PAGE: _article(ContentType.LANDING_PAGE),
    ContentType.LISTICLE: _article(
        ContentType.LISTICLE,
        min_length(10, "Please provide a more detailed topic description for your listicle"),
    ),
    ContentType.RESOURCE_GUIDE: _article(ContentType.RESOURCE_GUIDE),
    ContentType.SERVICE_PAGE: ContentTypeConfig(
        content_type=ContentType.SERVICE_PAGE,
        steps=(
            Step.TOPIC,
            Step.BUSINESS_NAME,
            Step.LOCATION_TOGGLE,
            Step.SERVICE_LOCATION,
            Step.SERVICE_AREA,
            Step.TARGET_AUDIENCE,
            Step.KEYWORDS,
            Step.LSI,
            Step.TITLE,
            Step.OUTLINE,
            Step.CONTENT,
        ),
        validators={
            Step.TOPIC: min_length(5, "Please enter a valid service description"),
            Step.BUSINESS_NAME: validate_business_name,
            Step.LOCATION_TOGGLE: validate_yes_no,
            Step.SERVICE_LOCATION: validate_location,
            Step.SERVICE_AREA: validate_service_area,
            Step.TARGET_AUDIENCE: min_length(15, "Please be more specific about your audience"),
            **_COMMON,
        },
        outline_format=OutlineFormat.SERVICE_TEMPLATE,
        conditional={
            Step.SERVICE_LOCATION: _uses_location,
            Step.SERVICE_AREA: _uses_location,
        },
    ),
    ContentType.SOCIAL_MEDIA_POST: ContentTypeConfig(
        content_type=ContentType.SOCIAL_MEDIA_POST,
        steps=(Step.PLATFORM, Step.TOPIC, Step.TITLE, Step.HASHTAGS, Step.LSI, Step.OUTLINE, Step.CONTENT),
        validators={
            Step.PLATFORM: validate_platform,
            Step.TOPIC: min_length(5, "Please provide a more detailed topic description"),
            Step.TITLE: validate_title,
            Step.HASHTAGS: validate_hashtags,
            Step.LSI: validate_selection,
        },
        outline_format=OutlineFormat.JSON,
        long_form=False,
        platforms=SOCIAL_PLATFORMS,
    ),
    ContentType.EMAIL_SEQUENCE: ContentTypeConfig(
        content_type=ContentType.EMAIL_SEQUENCE,
        steps=(Step.TOPIC, Step.EMAIL_COUNT, Step.TARGET_AUDIENCE, Step.TITLE, Step.OUTLINE, Step.CONTENT),
        validators={
            Step.TOPIC: min_length(10, "Please provide a clear sequence purpose"),
            Step.EMAIL_COUNT: validate_email_count,
            Step.TARGET_AUDIENCE: min_length(15, "Please be more specific about your audience"),
            Step.TITLE: validate_title,
        },
    ),
    ContentType.VIDEO_SCRIPT: ContentTypeConfig(
        content_type=ContentType.VIDEO_SCRIPT,
        steps=(Step.PLATFORM, Step.TOPIC, Step.TITLE, Step.OUTLINE, Step.CONTENT),
        validators={
            Step.PLATFORM: validate_platform,
            Step.TOPIC: min_length(10, "Please provide a more detailed video topic description"),
            Step.TITLE: validate_title,
        },
        long_form=False,
        platforms=VIDEO_PLATFORMS,
    ),
}
