from datetime import date

import pytest

from content_wizard.models import (
    ContentType,
    EmailSequenceMeta,
    Location,
    NodeKind,
    OutlineNode,
    Platform,
    ServicePageMeta,
    Session,
    Step,
)
from content_wizard.prompts.content import build_content_prompt, render_outline
from content_wizard.prompts.dispatch import GENERIC_PROMPT, build_step_prompt
from content_wizard.prompts.enhance import (
    ENHANCE_INSTRUCTIONS,
    INSERT_INSTRUCTIONS,
    INSERT_SYSTEM,
    EnhanceMode,
    InsertBlock,
    build_enhance_prompt,
    build_insert_prompt,
)
from content_wizard.prompts.keywords import build_keyword_prompt, build_lsi_prompt
from content_wizard.prompts.outline import MARKER_CONTRACT, build_outline_prompt
from content_wizard.prompts.titles import build_title_prompt, target_year

SERVICE_META = ServicePageMeta(
    business_name="Lone Star Plumbing",
    uses_location=True,
    location=Location(city="Austin", state="TX"),
    target_audience="Homeowners in older houses",
)


@pytest.mark.parametrize("today, year", [
    (date(2026, 3, 1), 2026),
    (date(2026, 9, 30), 2026),
    (date(2026, 10, 1), 2027),
    (date(2026, 12, 31), 2027),
])
def test_target_year(today, year):
    assert target_year(today) == year


@pytest.mark.parametrize("content_type", [t for t in ContentType if t != ContentType.SOCIAL_MEDIA_POST])
def test_title_prompts_carry_numbered_contract(content_type):
    prompt = build_title_prompt(content_type, "Digital marketing", Platform.YOUTUBE, today=date(2026, 3, 1))
    assert "Return EXACTLY 3 numbered titles" in prompt
    assert "1. Title 1 here" in prompt
    assert "First title MUST include the year 2026" in prompt


def test_landing_page_title_asks_for_og_variant():
    prompt = build_title_prompt(ContentType.LANDING_PAGE, "Trial signups")
    assert "pipe (|)" in prompt


def test_service_title_injects_business_and_location():
    prompt = build_title_prompt(ContentType.SERVICE_PAGE, "Plumbing", metadata=SERVICE_META)
    assert "Lone Star Plumbing" in prompt
    assert "Austin, TX" in prompt


def test_email_title_names_sequence_length():
    meta = EmailSequenceMeta(email_count=5, target_audience="Trial users who didn't convert")
    prompt = build_title_prompt(ContentType.EMAIL_SEQUENCE, "Onboarding", metadata=meta)
    assert "5-email sequence" in prompt


def test_social_title_asks_for_captions():
    prompt = build_title_prompt(ContentType.SOCIAL_MEDIA_POST, "Team photo", Platform.TWITTER_X, count=3)
    assert "Return EXACTLY 3 numbered captions" in prompt
    assert "under 280 characters" in prompt


def test_keyword_prompts():
    seo = build_keyword_prompt("Home gardening", today=date(2026, 3, 1))
    assert "7 SEO keywords" in seo
    assert "2026 versions" in seo
    assert "Output as comma-separated list" in seo

    tags = build_keyword_prompt("Home gardening", Platform.INSTAGRAM)
    assert "with # prefix" in tags
    assert "Maximum 5 hashtags" in tags


def test_lsi_prompt_contract_and_location():
    prompt = build_lsi_prompt(["seo", "marketing"], location=Location(city="Austin", state="TX"))
    assert "Output EXACTLY 15 unique keywords/phrases as comma-separated list." in prompt
    assert "Do not number the items." in prompt
    assert "seo, marketing" in prompt
    assert "Austin, TX" in prompt


@pytest.mark.parametrize("content_type", [
    ContentType.BLOG_POST,
    ContentType.LANDING_PAGE,
    ContentType.SERVICE_PAGE,
    ContentType.EMAIL_SEQUENCE,
    ContentType.VIDEO_SCRIPT,
    ContentType.LISTICLE,
    ContentType.RESOURCE_GUIDE,
])
def test_bracket_outline_prompts_keep_marker_contract(content_type):
    prompt = build_outline_prompt(content_type, "Topic", "Title", Platform.YOUTUBE, SERVICE_META)
    assert MARKER_CONTRACT in prompt


def test_social_outline_prompt_requests_json():
    prompt = build_outline_prompt(ContentType.SOCIAL_MEDIA_POST, "Topic", "Title", Platform.LINKEDIN)
    assert '"structure"' in prompt
    assert "Return ONLY the JSON object" in prompt


def test_email_outline_injects_exact_count():
    meta = EmailSequenceMeta(email_count=5)
    prompt = build_outline_prompt(ContentType.EMAIL_SEQUENCE, "Onboarding", "Welcome", metadata=meta)
    assert "Exactly 5 emails" in prompt
    assert "Write EXACTLY 5 [H1] sections" in prompt


def test_service_outline_prompt_injects_details():
    prompt = build_outline_prompt(ContentType.SERVICE_PAGE, "Plumbing", "Title", metadata=SERVICE_META)
    assert "Lone Star Plumbing" in prompt
    assert "Austin, TX" in prompt


def test_render_outline_round_trips_markers():
    outline = [
        OutlineNode(kind=NodeKind.H1, text="Intro"),
        OutlineNode(kind=NodeKind.LIST, text="Points", children=("a", "b")),
        OutlineNode(kind=NodeKind.H1, text="Next"),
        OutlineNode(kind=NodeKind.CTA, text="Go"),
    ]
    assert render_outline(outline) == "[H1] Intro\n[LIST] Points\n- a\n- b\n\n[H1] Next\n[CTA] Go"


def test_content_prompt_states_minimum_and_limits():
    outline = [OutlineNode(kind=NodeKind.H1, text="Intro")]
    prompt = build_content_prompt(ContentType.BLOG_POST, "Topic", "Title", outline, ["seo"], min_words=1200)
    assert "at least 1200 words" in prompt
    assert "[H1] Intro" in prompt
    assert "seo" in prompt

    social = build_content_prompt(
        ContentType.SOCIAL_MEDIA_POST, "Topic", "Caption", outline, platform=Platform.TWITTER_X
    )
    assert "under 280 characters" in social
    assert "at most 5 hashtags" in social


@pytest.mark.parametrize("content_type", list(ContentType))
@pytest.mark.parametrize("step", list(Step))
def test_every_step_resolves_to_a_prompt(content_type, step):
    session = Session(content_type=content_type, topic="Digital marketing", title="Title", keywords=["seo"])
    prompt, _system = build_step_prompt(step, session, today=date(2026, 3, 1))
    assert prompt.strip()


def test_unspecialised_step_uses_generic_template():
    session = Session(content_type=ContentType.BLOG_POST, topic="Digital marketing")
    prompt, system = build_step_prompt(Step.TARGET_AUDIENCE, session)
    assert prompt == GENERIC_PROMPT.format(step="target-audience", content_type="Blog Post", topic="Digital marketing")
    assert system is None


# ── Editing prompts ───────────────────────────────────────────────────


@pytest.mark.parametrize("mode", list(EnhanceMode))
def test_enhance_prompt_per_mode(mode):
    prompt, system = build_enhance_prompt("<p>Old text.</p>", mode.value)
    assert prompt.endswith("<p>Old text.</p>")
    assert "preserve ALL HTML tags" in system
    assert system.endswith(ENHANCE_INSTRUCTIONS[mode])


def test_enhance_unknown_mode():
    with pytest.raises(ValueError):
        build_enhance_prompt("<p>x</p>", "shout")


def test_every_block_has_instructions():
    assert set(INSERT_INSTRUCTIONS) == set(InsertBlock)
    assert all(text.strip() for text in INSERT_INSTRUCTIONS.values())


def test_insert_prompt():
    prompt, system = build_insert_prompt("faq", "Leaky faucets waste water.", "Fixing Leaks")
    assert system == INSERT_SYSTEM
    assert prompt.startswith("Context: Leaky faucets waste water.\nTitle: Fixing Leaks\nType: faq")
    assert '<div class="faq-section">' in prompt
    assert "Generate 5-7 questions" in prompt
