"""Pydantic models for the wizard session state and derived data structures."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ContentType(str, Enum):
    BLOG_POST = "Blog Post"
    LANDING_PAGE = "Landing Page"
    SERVICE_PAGE = "Service Page"
    EMAIL_SEQUENCE = "Email Sequence"
    SOCIAL_MEDIA_POST = "Social Media Post"
    VIDEO_SCRIPT = "Video Script"
    LISTICLE = "Listicle"
    RESOURCE_GUIDE = "Resource Guide"


class Platform(str, Enum):
    INSTAGRAM = "Instagram"
    TWITTER_X = "Twitter/X"
    LINKEDIN = "LinkedIn"
    FACEBOOK = "Facebook"
    PINTEREST = "Pinterest"
    THREADS = "Threads"
    YOUTUBE = "YouTube"
    TIKTOK = "TikTok"
    EXPLAINER = "Explainer"

    @property
    def is_social(self) -> bool:
        return self not in (Platform.YOUTUBE, Platform.TIKTOK, Platform.EXPLAINER)


class Step(str, Enum):
    PLATFORM = "platform"
    TOPIC = "topic"
    BUSINESS_NAME = "business-name"
    LOCATION_TOGGLE = "location-toggle"
    SERVICE_LOCATION = "service-location"
    SERVICE_AREA = "service-area"
    EMAIL_COUNT = "email-count"
    TARGET_AUDIENCE = "target-audience"
    TITLE = "title"
    KEYWORDS = "keywords"
    HASHTAGS = "hashtags"
    LSI = "lsi"
    OUTLINE = "outline"
    CONTENT = "content"


class NodeKind(str, Enum):
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    LIST = "list"
    CTA = "cta"


def new_node_id() -> str:
    return str(uuid.uuid4())


class OutlineNode(BaseModel):
    """One entry of the flat outline sequence.

    Hierarchy is implied by order: an H1 owns every following node up to
    the next H1. ``children`` is only populated for LIST nodes.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_node_id)
    kind: NodeKind
    text: str = ""
    children: tuple[str, ...] = ()


# ── Content-type side-channel metadata ───────────────────────────────


class Location(BaseModel):
    """A parsed service location ("Austin, TX" or "Phoenix Metro Area")."""

    model_config = ConfigDict(frozen=True)

    city: str
    state: Optional[str] = None
    is_metro_area: bool = False

    def display(self) -> str:
        if self.is_metro_area:
            return f"{self.city} Metro Area"
        return f"{self.city}, {self.state}"


class ServicePageMeta(BaseModel):
    """Service details gathered across the Service Page steps."""

    kind: Literal["service_page"] = "service_page"
    business_name: str = ""
    uses_location: bool = False
    location: Optional[Location] = None
    service_areas: list[str] = Field(default_factory=list)
    target_audience: str = ""


class EmailSequenceMeta(BaseModel):
    """Sequence shape gathered across the Email Sequence steps."""

    kind: Literal["email_sequence"] = "email_sequence"
    email_count: int = 1
    target_audience: str = ""


SessionMetadata = Annotated[
    Union[ServicePageMeta, EmailSequenceMeta],
    Field(discriminator="kind"),
]


class Session(BaseModel):
    """The wizard aggregate owned by a single step machine."""

    content_type: Optional[ContentType] = None
    platform: Optional[Platform] = None
    current_step: Optional[Step] = None

    topic: str = ""
    title: str = ""
    title_suggestions: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    lsi_keywords: list[str] = Field(default_factory=list)
    selected_keywords: list[str] = Field(default_factory=list)
    outline: list[OutlineNode] = Field(default_factory=list)
    content: str = ""
    meta_description: str = ""
    metadata: Optional[SessionMetadata] = None

    # Persistence
    current_id: Optional[str] = None

    # Transient
    is_loading: bool = False
    last_error: Optional[str] = None


# ── Step contract values ─────────────────────────────────────────────


class StepPrompt(BaseModel):
    """User-facing guidance shown for a step."""

    text: str = ""
    examples: list[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    ok: bool
    reason: Optional[str] = None


# ── SEO metrics ──────────────────────────────────────────────────────


class KeywordStat(BaseModel):
    keyword: str
    count: int = Field(default=0, ge=0)
    density: float = 0.0


class HeadingDistribution(BaseModel):
    h1: int = 0
    h2: int = 0
    h3: int = 0
    h4: int = 0
    h5: int = 0
    h6: int = 0


class ParagraphStats(BaseModel):
    total: int = 0
    long_paragraphs: int = 0


class ImageStats(BaseModel):
    total: int = 0
    with_alt: int = 0


class LinkStats(BaseModel):
    total: int = 0
    internal: int = 0
    external: int = 0


class SEOMetrics(BaseModel):
    title_length: int = 0
    meta_description_length: int = 0
    word_count: int = 0
    reading_time: int = 0
    flesch_score: float = 0.0
    heading_distribution: HeadingDistribution = Field(default_factory=HeadingDistribution)
    paragraph_stats: ParagraphStats = Field(default_factory=ParagraphStats)
    image_stats: ImageStats = Field(default_factory=ImageStats)
    link_stats: LinkStats = Field(default_factory=LinkStats)
    keyword_stats: list[KeywordStat] = Field(default_factory=list)
    total_keyword_density: float = 0.0


class ScoreBreakdown(BaseModel):
    content: int = 0
    readability: int = 0
    keywords: int = 0
    structure: int = 0
    technical: int = 0


class SEOScore(BaseModel):
    total: int = 0
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)


# ── Backend records ──────────────────────────────────────────────────


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentRecord(BaseModel):
    """A saved piece of content, as stored by the hosted backend."""

    id: str = Field(default_factory=new_node_id)
    user_id: str
    content_type: ContentType
    topic: str = ""
    title: str = ""
    outline: list[OutlineNode] = Field(default_factory=list)
    content: str = ""
    keywords: list[str] = Field(default_factory=list)
    meta_description: str = ""
    platform: Optional[Platform] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class Plan(BaseModel):
    name: str
    limit: int
    price: int


class UsageInfo(BaseModel):
    content_count: int
    limit: int
    period_start: datetime
    period_end: datetime

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.content_count)

    @property
    def has_credits(self) -> bool:
        return self.content_count < self.limit
