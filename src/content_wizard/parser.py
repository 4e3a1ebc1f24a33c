"""Parsers for the reply shapes the prompt builders ask the model for.

The numbered-list, comma-list and bracket-tag grammars are best-effort: model
chatter and missing markers degrade the result instead of raising. Only the
JSON outline grammar is strict, since its prompt asks for literal JSON.
"""

from __future__ import annotations

import json
import logging
import re

from content_wizard.errors import ParseError
from content_wizard.models import NodeKind, OutlineNode

LOGGER = logging.getLogger(__name__)

_NUMBERED_RE = re.compile(r"^\d+\.\s*")
_HEADING_OR_BULLET_RE = re.compile(r"^(?:#{1,6}\s|[-*•]\s?|\d+[.)]\s)")
_COMMA_RUN_RE = re.compile(r"[^,\n]+(?:,[^,\n]+)+")
_ITEM_MARKER_RE = re.compile(r"^(?:[-*•]\s*|\d+[.)]\s*)")
_MARKER_RE = re.compile(r"^\[(H2|H3|LIST|CTA)\]\s*(.*)$", re.IGNORECASE)
_H1_SPLIT_RE = re.compile(r"\[H1\]", re.IGNORECASE)
_BULLET_RE = re.compile(r"^[-*•]\s*")
_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")

_MARKER_KINDS = {
    "H2": NodeKind.H2,
    "H3": NodeKind.H3,
    "LIST": NodeKind.LIST,
    "CTA": NodeKind.CTA,
}
DEFAULT_LIST_TEXT = "List Items"


# ── Numbered list ─────────────────────────────────────────────────────


def parse_numbered_list(text: str) -> list[str]:
    """Extract ``1. ...`` lines, dropping everything else."""
    items = []
    for line in text.splitlines():
        line = line.strip()
        if not _NUMBERED_RE.match(line):
            continue
        item = _NUMBERED_RE.sub("", line, count=1).strip().strip('"').strip()
        if item:
            items.append(item)
    return items


# ── Comma list ────────────────────────────────────────────────────────


def format_hashtag(value: str) -> str:
    """Collapse a phrase into a single hashtag word, without the ``#``."""
    value = value.lstrip("#")
    titled = re.sub(r"\w\S*", lambda m: m.group(0)[0].upper() + m.group(0)[1:], value)
    camel = re.sub(r"[-_](.)", lambda m: m.group(1).upper(), titled)
    return re.sub(r"[^a-zA-Z0-9\u00C0-\u017F]", "", camel)


def format_hashtags(tags: list[str]) -> list[str]:
    formatted = []
    for tag in tags:
        body = format_hashtag(tag.strip())
        if body:
            formatted.append(f"#{body}")
    return formatted


def _pick_comma_source(text: str) -> str:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if len(lines) <= 1:
        return lines[0] if lines else ""

    for line in lines:
        if "," in line and not line.endswith(":") and not _HEADING_OR_BULLET_RE.match(line):
            return line

    runs = _COMMA_RUN_RE.findall(text)
    if runs:
        return max(runs, key=len)

    # No commas anywhere: one item per line
    return ",".join(lines)


def _clean_item(item: str) -> str:
    item = _ITEM_MARKER_RE.sub("", item.strip())
    return item.strip().strip("\"'").rstrip(".").strip()


def parse_comma_list(text: str, limit: int = 15, hashtags: bool = False) -> list[str]:
    """Parse a comma-separated reply into at most ``limit`` unique items.

    Args:
        text: The model reply.
        limit: Maximum number of items to keep.
        hashtags: Normalise every item into ``#CamelCase`` form.
    """
    source = _pick_comma_source(text)
    items = [_clean_item(part) for part in source.split(",")]
    items = [item for item in items if item]
    if hashtags:
        items = format_hashtags(items)

    result: list[str] = []
    seen: set[str] = set()
    for item in items:
        key = item.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
        if len(result) >= limit:
            break
    return result


# ── Bracket-tag outline ───────────────────────────────────────────────


def _parse_section_body(lines: list[str], pending: list[dict]) -> None:
    current = None
    for line in lines:
        marker = _MARKER_RE.match(line)
        if marker:
            kind = _MARKER_KINDS[marker.group(1).upper()]
            text = marker.group(2).strip()
            if kind == NodeKind.LIST and not text:
                text = DEFAULT_LIST_TEXT
            current = {"kind": kind, "text": text, "children": []}
            pending.append(current)
        elif _BULLET_RE.match(line) and current is not None and current["kind"] == NodeKind.LIST:
            item = _BULLET_RE.sub("", line, count=1).strip()
            if item:
                current["children"].append(item)


def parse_bracket_outline(text: str) -> list[OutlineNode]:
    """Rebuild an outline from ``[H1]``/``[H2]``/``[LIST]``/``[CTA]`` markup.

    Every ``[H1]`` opens a section whose first line is the H1 text. Within a
    section, marker lines open nodes and ``-`` lines feed the open LIST node.
    Anything else is ignored, so partial or chatty replies still yield the
    nodes that were recognisable.
    """
    segments = _H1_SPLIT_RE.split(text)
    pending: list[dict] = []

    preamble = [line.strip() for line in segments[0].splitlines() if line.strip()]
    if len(segments) == 1 or any(_MARKER_RE.match(line) for line in preamble):
        _parse_section_body(preamble, pending)

    for segment in segments[1:]:
        lines = [line.strip() for line in segment.splitlines() if line.strip()]
        if not lines:
            continue
        if _MARKER_RE.match(lines[0]):
            pending.append({"kind": NodeKind.H1, "text": "Untitled Section", "children": []})
            _parse_section_body(lines, pending)
        else:
            pending.append({"kind": NodeKind.H1, "text": lines[0], "children": []})
            _parse_section_body(lines[1:], pending)

    if not pending:
        LOGGER.warning("No outline markers found in model reply")

    return [
        OutlineNode(kind=node["kind"], text=node["text"], children=tuple(node["children"]))
        for node in pending
    ]


# ── JSON outline (single social post) ─────────────────────────────────


def _as_list(value) -> list[str]:
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    if isinstance(value, str):
        return [line.strip() for line in value.splitlines() if line.strip()]
    return []


def parse_json_outline(text: str) -> list[OutlineNode]:
    """Map a ``{"structure": {...}}`` post plan onto outline nodes.

    Raises:
        ParseError: If the reply is not JSON or lacks a ``structure`` object.
    """
    cleaned = _FENCE_RE.sub("", text.strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse social media outline: {e}") from e

    structure = data.get("structure") if isinstance(data, dict) else None
    if not isinstance(structure, dict):
        raise ParseError("Failed to parse social media outline: missing 'structure' object")

    nodes = []

    def add(kind: NodeKind, value, list_text: str | None = None):
        if list_text is not None:
            items = _as_list(value)
            if items:
                nodes.append(OutlineNode(kind=kind, text=list_text, children=tuple(items)))
        elif isinstance(value, str) and value.strip():
            nodes.append(OutlineNode(kind=kind, text=value.strip()))

    add(NodeKind.H1, structure.get("hook"))
    add(NodeKind.H2, structure.get("body"))
    add(NodeKind.LIST, structure.get("details"), list_text="Key Points")
    add(NodeKind.CTA, structure.get("cta"))
    add(NodeKind.LIST, structure.get("media"), list_text="Media References")
    add(NodeKind.H2, structure.get("hashtags"))
    return nodes
