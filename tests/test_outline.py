import pytest

from content_wizard import outline as ops
from content_wizard.errors import ValidationError
from content_wizard.models import Location, NodeKind, OutlineNode, ServicePageMeta


@pytest.fixture
def nodes():
    return [
        OutlineNode(kind=NodeKind.H1, text="Intro"),
        OutlineNode(kind=NodeKind.H2, text="Hook"),
        OutlineNode(kind=NodeKind.LIST, text="Points", children=("one", "two")),
        OutlineNode(kind=NodeKind.H1, text="Body"),
        OutlineNode(kind=NodeKind.CTA, text="Sign up"),
    ]


def test_reorder_round_trip_restores_sequence(nodes):
    moved = ops.reorder(nodes, 1, 3)
    assert [n.text for n in moved] == ["Intro", "Points", "Body", "Hook", "Sign up"]
    assert ops.reorder(moved, 3, 1) == nodes


def test_reorder_preserves_ids_and_content(nodes):
    moved = ops.reorder(nodes, 0, 4)
    assert {n.id: n for n in moved} == {n.id: n for n in nodes}


def test_operations_do_not_mutate_input(nodes):
    before = list(nodes)
    ops.remove(nodes, 0)
    ops.reorder(nodes, 0, 2)
    ops.update_content(nodes, 1, "Changed")
    ops.append_list_item(nodes, 2, "three")
    assert nodes == before


def test_insert_at_end_and_duplicate_id(nodes):
    extra = OutlineNode(kind=NodeKind.H2, text="Extra")
    updated = ops.insert(nodes, extra, len(nodes))
    assert updated[-1] is extra
    with pytest.raises(ValueError):
        ops.insert(updated, extra, 0)


def test_insert_out_of_range(nodes):
    with pytest.raises(IndexError):
        ops.insert(nodes, OutlineNode(kind=NodeKind.H2), len(nodes) + 1)


def test_remove_keeps_other_ids(nodes):
    updated = ops.remove(nodes, 1)
    assert [n.id for n in updated] == [n.id for i, n in enumerate(nodes) if i != 1]


def test_update_content_keeps_id(nodes):
    updated = ops.update_content(nodes, 1, "New hook")
    assert updated[1].id == nodes[1].id
    assert updated[1].text == "New hook"


def test_list_item_operations(nodes):
    updated = ops.append_list_item(nodes, 2, "three")
    assert updated[2].children == ("one", "two", "three")
    updated = ops.remove_list_item(updated, 2, 0)
    assert updated[2].children == ("two", "three")
    assert updated[2].id == nodes[2].id


def test_list_item_operations_reject_non_list(nodes):
    with pytest.raises(ValueError):
        ops.append_list_item(nodes, 0, "nope")
    with pytest.raises(IndexError):
        ops.remove_list_item(nodes, 2, 5)


def test_sections_group_by_h1(nodes):
    groups = ops.sections(nodes)
    assert [[n.text for n in g] for g in groups] == [["Intro", "Hook", "Points"], ["Body", "Sign up"]]


# ── Locations ─────────────────────────────────────────────────────────


def test_parse_city_state():
    assert ops.parse_location("Austin, TX") == Location(city="Austin", state="TX", is_metro_area=False)


def test_parse_metro_area():
    assert ops.parse_location("Phoenix Metro Area") == Location(city="Phoenix", is_metro_area=True)


@pytest.mark.parametrize("value", ["not a location", "Austin, Texas", "Austin TX", "", "12 Main, TX"])
def test_invalid_locations(value):
    assert not ops.is_valid_location(value)
    with pytest.raises(ValidationError):
        ops.parse_location(value)


def test_format_location():
    assert ops.format_location(Location(city="Austin", state="TX")) == "Austin, TX"
    assert ops.format_location(Location(city="Phoenix", is_metro_area=True)) == "Phoenix Metro Area"


# ── Service Page template ─────────────────────────────────────────────


def _meta(uses_location=True):
    return ServicePageMeta(
        business_name="Lone Star Plumbing",
        uses_location=uses_location,
        location=Location(city="Austin", state="TX") if uses_location else None,
        service_areas=["Round Rock", "Cedar Park"] if uses_location else [],
        target_audience="Homeowners with older houses",
    )


def test_service_outline_with_location():
    nodes = ops.build_service_outline("Emergency plumbing", "Emergency Plumbing Services", _meta())
    texts = [n.text for n in nodes]
    assert nodes[0].kind == NodeKind.H1
    assert "Austin, TX" in nodes[0].text
    assert "Local Expertise in Austin, TX" in texts
    assert "About Lone Star Plumbing" in texts
    assert nodes[-1].kind == NodeKind.CTA
    assert nodes[-1].text == "Contact Lone Star Plumbing today to get started in Austin, TX"
    local = next(n for n in nodes if n.text == "Local Knowledge")
    assert "Areas we serve: Round Rock, Cedar Park" in local.children


def test_service_outline_without_location():
    nodes = ops.build_service_outline("Emergency plumbing", "Emergency Plumbing Services", _meta(False))
    assert not any("Local Expertise" in n.text for n in nodes)
    assert not any("Frequently Asked Questions" in n.text for n in nodes)
    assert nodes[0].text == "Emergency Plumbing Services"


def test_service_outline_title_already_names_location():
    nodes = ops.build_service_outline("Plumbing", "Austin, TX Plumbing Experts", _meta())
    assert nodes[0].text == "Austin, TX Plumbing Experts"
