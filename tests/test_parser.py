import pytest

from content_wizard.errors import ParseError
from content_wizard.models import NodeKind
from content_wizard.parser import (
    format_hashtag,
    parse_bracket_outline,
    parse_comma_list,
    parse_json_outline,
    parse_numbered_list,
)

OUTLINE_REPLY = """[H1] Introduction
[H2] Hook Statement
[LIST]
- Key problem point
- Current market situation
[H1] Choosing Channels
[H2] Search
[LIST] Channel Options
- SEO
- Paid search
[CTA] Book a free audit
"""


def _shape(nodes):
    return [(n.kind, n.text, n.children) for n in nodes]


# ── Numbered list ─────────────────────────────────────────────────────


def test_numbered_list_extracts_three_titles():
    reply = '1. First Title\n2. "Second Title"\n3.Third Title'
    assert parse_numbered_list(reply) == ["First Title", "Second Title", "Third Title"]


def test_numbered_list_drops_model_chatter():
    reply = "Here are your titles:\n\n1. Alpha\nSome note\n2. Beta\n- not numbered\nHope this helps!"
    assert parse_numbered_list(reply) == ["Alpha", "Beta"]


def test_numbered_list_with_no_numbers_is_empty():
    assert parse_numbered_list("I cannot help with that.") == []


# ── Comma list ────────────────────────────────────────────────────────


def test_comma_list_caps_at_requested_count():
    reply = ", ".join(f"term {i}" for i in range(20))
    items = parse_comma_list(reply, limit=15)
    assert len(items) == 15
    assert items[0] == "term 0"
    assert items[-1] == "term 14"


def test_comma_list_prefers_first_comma_line_over_preamble():
    reply = "Here are the keywords:\nseo tools, keyword research, link building\nLet me know!"
    assert parse_comma_list(reply) == ["seo tools", "keyword research", "link building"]


def test_comma_list_skips_bullet_and_heading_lines():
    reply = "## Keywords, grouped\n- first, second\nalpha, beta, gamma"
    assert parse_comma_list(reply) == ["alpha", "beta", "gamma"]


def test_comma_list_falls_back_to_longest_run():
    reply = "- a, b\n- c, d, e, f"
    assert parse_comma_list(reply) == ["c", "d", "e", "f"]


def test_comma_list_without_commas_uses_lines():
    reply = "alpha\nbeta\ngamma"
    assert parse_comma_list(reply) == ["alpha", "beta", "gamma"]


def test_comma_list_drops_empty_and_duplicate_items():
    assert parse_comma_list("seo, , SEO, marketing,") == ["seo", "marketing"]


def test_comma_list_formats_hashtags():
    items = parse_comma_list("#digital marketing, small-business, #Growth!!", hashtags=True)
    assert items == ["#DigitalMarketing", "#SmallBusiness", "#Growth"]


@pytest.mark.parametrize("raw, expected", [
    ("social media", "SocialMedia"),
    ("#already", "Already"),
    ("eco_friendly", "EcoFriendly"),
    ("café culture", "CaféCulture"),
    ("100% real", "100Real"),
])
def test_format_hashtag(raw, expected):
    assert format_hashtag(raw) == expected


# ── Bracket outline ───────────────────────────────────────────────────


def test_bracket_outline_builds_flat_sequence():
    nodes = parse_bracket_outline(OUTLINE_REPLY)
    assert _shape(nodes) == [
        (NodeKind.H1, "Introduction", ()),
        (NodeKind.H2, "Hook Statement", ()),
        (NodeKind.LIST, "List Items", ("Key problem point", "Current market situation")),
        (NodeKind.H1, "Choosing Channels", ()),
        (NodeKind.H2, "Search", ()),
        (NodeKind.LIST, "Channel Options", ("SEO", "Paid search")),
        (NodeKind.CTA, "Book a free audit", ()),
    ]


def test_bracket_outline_assigns_unique_ids():
    nodes = parse_bracket_outline(OUTLINE_REPLY)
    assert len({n.id for n in nodes}) == len(nodes)


def test_bracket_outline_is_whitespace_insensitive():
    spaced = "\n\n".join(line + "   " for line in OUTLINE_REPLY.splitlines())
    assert _shape(parse_bracket_outline(spaced)) == _shape(parse_bracket_outline(OUTLINE_REPLY))


def test_bracket_outline_ignores_bullets_outside_lists():
    nodes = parse_bracket_outline("[H1] Intro\n- stray bullet\n[H2] Point\n- another stray")
    assert _shape(nodes) == [(NodeKind.H1, "Intro", ()), (NodeKind.H2, "Point", ())]


def test_bracket_outline_tolerates_truncated_reply():
    nodes = parse_bracket_outline("Sure! Here is the outline.\n[H1] Intro\n[H2] Hook\n[LIST]\n- one\n[H1]")
    assert _shape(nodes) == [
        (NodeKind.H1, "Intro", ()),
        (NodeKind.H2, "Hook", ()),
        (NodeKind.LIST, "List Items", ("one",)),
    ]


def test_bracket_outline_without_h1_keeps_other_markers():
    nodes = parse_bracket_outline("[H2] Orphan heading\n[CTA] Sign up")
    assert _shape(nodes) == [(NodeKind.H2, "Orphan heading", ()), (NodeKind.CTA, "Sign up", ())]


def test_bracket_outline_h1_followed_by_marker():
    nodes = parse_bracket_outline("[H1]\n[H2] Point")
    assert nodes[0].kind == NodeKind.H1
    assert nodes[0].text == "Untitled Section"


def test_bracket_outline_of_plain_prose_is_empty():
    assert parse_bracket_outline("I'm sorry, I can't do that.") == []


def test_bracket_outline_markers_are_case_insensitive():
    nodes = parse_bracket_outline("[h1] Intro\n[list] Steps\n* first\n• second")
    assert _shape(nodes) == [
        (NodeKind.H1, "Intro", ()),
        (NodeKind.LIST, "Steps", ("first", "second")),
    ]


# ── JSON outline ──────────────────────────────────────────────────────


def test_json_outline_maps_structure():
    reply = """```json
{"platform": "LinkedIn", "structure": {
  "hook": "Ever wondered why?",
  "body": "Our main message",
  "details": ["Point one", "Point two"],
  "cta": "Comment below",
  "media": ["[IMAGE 1: Team photo]"],
  "hashtags": "Three tags at the end"
}}
```"""
    nodes = parse_json_outline(reply)
    assert _shape(nodes) == [
        (NodeKind.H1, "Ever wondered why?", ()),
        (NodeKind.H2, "Our main message", ()),
        (NodeKind.LIST, "Key Points", ("Point one", "Point two")),
        (NodeKind.CTA, "Comment below", ()),
        (NodeKind.LIST, "Media References", ("[IMAGE 1: Team photo]",)),
        (NodeKind.H2, "Three tags at the end", ()),
    ]


def test_json_outline_skips_missing_fields():
    nodes = parse_json_outline('{"structure": {"hook": "Hi", "details": "line one\\nline two"}}')
    assert _shape(nodes) == [
        (NodeKind.H1, "Hi", ()),
        (NodeKind.LIST, "Key Points", ("line one", "line two")),
    ]


@pytest.mark.parametrize("reply", [
    "not json at all",
    '{"structure": ',
    '{"platform": "Instagram"}',
    '["hook", "body"]',
])
def test_json_outline_malformed_reply_raises(reply):
    with pytest.raises(ParseError):
        parse_json_outline(reply)
