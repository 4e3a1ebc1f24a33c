"""Outline editing operations and the Service Page outline template.

Every editing operation returns a new list and leaves its input untouched.
Node ids only disappear when a node is explicitly removed.
"""

from __future__ import annotations

import re
from typing import Sequence

from content_wizard.errors import ValidationError
from content_wizard.models import Location, NodeKind, OutlineNode, ServicePageMeta, Step

LOCATION_RE = re.compile(r"^[A-Za-z\s]+(Metro\s+Area|,\s*[A-Z]{2})$")
_METRO_RE = re.compile(r"^(?P<city>[A-Za-z\s]+?)\s+Metro\s+Area$")
_CITY_STATE_RE = re.compile(r"^(?P<city>[A-Za-z\s]+?)\s*,\s*(?P<state>[A-Z]{2})$")

LOCATION_FORMAT_HINT = (
    "Please use format: City, ST (e.g., Austin, TX) or Metro Area (e.g., Phoenix Metro Area)"
)


def _check_index(outline: Sequence[OutlineNode], index: int) -> None:
    if not 0 <= index < len(outline):
        raise IndexError(f"Outline index {index} out of range (size {len(outline)})")


def _require_list(node: OutlineNode) -> None:
    if node.kind != NodeKind.LIST:
        raise ValueError(f"Node {node.id} is a {node.kind.value} node, not a list")


# ── Editing operations ────────────────────────────────────────────────


def insert(outline: Sequence[OutlineNode], node: OutlineNode, at_index: int) -> list[OutlineNode]:
    """Insert ``node`` before position ``at_index`` (``len(outline)`` appends)."""
    if not 0 <= at_index <= len(outline):
        raise IndexError(f"Insert position {at_index} out of range (size {len(outline)})")
    if any(existing.id == node.id for existing in outline):
        raise ValueError(f"Outline already contains a node with id {node.id}")
    updated = list(outline)
    updated.insert(at_index, node)
    return updated


def remove(outline: Sequence[OutlineNode], index: int) -> list[OutlineNode]:
    _check_index(outline, index)
    return [node for i, node in enumerate(outline) if i != index]


def reorder(outline: Sequence[OutlineNode], from_index: int, to_index: int) -> list[OutlineNode]:
    """Move one node; every node keeps its id and content."""
    _check_index(outline, from_index)
    _check_index(outline, to_index)
    updated = list(outline)
    node = updated.pop(from_index)
    updated.insert(to_index, node)
    return updated


def update_content(outline: Sequence[OutlineNode], index: int, new_text: str) -> list[OutlineNode]:
    _check_index(outline, index)
    updated = list(outline)
    updated[index] = updated[index].model_copy(update={"text": new_text})
    return updated


def append_list_item(outline: Sequence[OutlineNode], index: int, text: str) -> list[OutlineNode]:
    _check_index(outline, index)
    node = outline[index]
    _require_list(node)
    updated = list(outline)
    updated[index] = node.model_copy(update={"children": node.children + (text,)})
    return updated


def remove_list_item(outline: Sequence[OutlineNode], index: int, item_index: int) -> list[OutlineNode]:
    _check_index(outline, index)
    node = outline[index]
    _require_list(node)
    if not 0 <= item_index < len(node.children):
        raise IndexError(f"List item {item_index} out of range (size {len(node.children)})")
    children = node.children[:item_index] + node.children[item_index + 1:]
    updated = list(outline)
    updated[index] = node.model_copy(update={"children": children})
    return updated


def sections(outline: Sequence[OutlineNode]) -> list[list[OutlineNode]]:
    """Group the flat sequence under its H1 nodes.

    Nodes before the first H1 form their own leading group.
    """
    groups: list[list[OutlineNode]] = []
    for node in outline:
        if node.kind == NodeKind.H1 or not groups:
            groups.append([node])
        else:
            groups[-1].append(node)
    return groups


# ── Locations ─────────────────────────────────────────────────────────


def is_valid_location(value: str) -> bool:
    return bool(LOCATION_RE.match(value.strip()))


def parse_location(value: str) -> Location:
    """Parse ``"City, ST"`` or ``"City Metro Area"``.

    Raises:
        ValidationError: For anything else.
    """
    value = value.strip()
    if is_valid_location(value):
        metro = _METRO_RE.match(value)
        if metro:
            return Location(city=" ".join(metro.group("city").split()), is_metro_area=True)
        city_state = _CITY_STATE_RE.match(value)
        if city_state:
            return Location(
                city=" ".join(city_state.group("city").split()),
                state=city_state.group("state"),
            )
    raise ValidationError(Step.SERVICE_LOCATION.value, LOCATION_FORMAT_HINT)


def format_location(location: Location) -> str:
    return location.display()


# ── Service Page template ─────────────────────────────────────────────


def _list(text: str, *items: str) -> OutlineNode:
    return OutlineNode(kind=NodeKind.LIST, text=text, children=tuple(i for i in items if i))


def build_service_outline(topic: str, title: str, meta: ServicePageMeta) -> list[OutlineNode]:
    """Emit the fixed Service Page outline for the gathered service details.

    Location sections (local expertise, benefits, FAQ) only appear when the
    service is location-specific and a location was given.
    """
    service = topic.strip() or title.strip()
    business = meta.business_name.strip()
    audience = meta.target_audience.strip()
    location = meta.location.display() if meta.uses_location and meta.location else ""

    main_title = title.strip() or service
    if location and location not in main_title:
        main_title = f"{main_title} in {location}"

    nodes = [
        OutlineNode(kind=NodeKind.H1, text=main_title),
        OutlineNode(kind=NodeKind.H2, text=f"Introduction to {service}"),
    ]

    if business:
        nodes += [
            OutlineNode(kind=NodeKind.H2, text=f"About {business}"),
            _list(
                "Company Overview",
                f"Who {business} is and how long we have offered {service}",
                "Licenses, certifications and credentials",
                f"What sets {business} apart",
            ),
        ]

    if location:
        areas = ", ".join(meta.service_areas)
        nodes += [
            OutlineNode(kind=NodeKind.H2, text=f"Local Expertise in {location}"),
            _list(
                "Local Knowledge",
                f"Experience serving customers across {location}",
                "Familiarity with local regulations and conditions",
                f"Areas we serve: {areas}" if areas else "",
            ),
            OutlineNode(kind=NodeKind.H2, text=f"Benefits of Choosing a Local {service} Provider"),
            _list(
                "Local Benefits",
                "Fast response times",
                "Knowledge of the community",
                "Trusted local references",
            ),
            OutlineNode(kind=NodeKind.H2, text=f"Frequently Asked Questions About {service} in {location}"),
        ]

    nodes += [
        OutlineNode(kind=NodeKind.H2, text=f"Our {service} Services"),
        _list("Services Offered", "Core services", "Specialised services", "Packages and pricing options"),
        OutlineNode(kind=NodeKind.H2, text="Who We Serve"),
        _list("Target Audience", audience or "Customers who need reliable service"),
        OutlineNode(kind=NodeKind.H2, text="What Our Clients Say"),
        OutlineNode(kind=NodeKind.H2, text="Our Process"),
        _list("Process Steps", "Initial consultation", "Tailored plan and quote", "Delivery and follow-up"),
    ]

    contact = business or "us"
    cta = f"Contact {contact} today to get started"
    if location:
        cta = f"{cta} in {location}"
    nodes.append(OutlineNode(kind=NodeKind.CTA, text=cta))
    return nodes
