"""Unit tests for route reconstruction and instruction rendering."""

from __future__ import annotations

import pytest

from wayfinder.models import Coordinates, PathSegment, PointOfInterest
from wayfinder.routes import (
    RouteReconstructionError,
    reconstruct_route,
    render_instruction,
)
from wayfinder.solver import Predecessor, SearchResult

LOBBY = PointOfInterest("lobby", "Lobby", "info", Coordinates(0, 0, 0))
LIFT_G = PointOfInterest("lift_g", "Lift", "elevator", Coordinates(5, 0, 0))
LIFT_1 = PointOfInterest("lift_1", "Lift", "elevator", Coordinates(5, 0, 1))
NODES = {poi.id: poi for poi in (LOBBY, LIFT_G, LIFT_1)}

WALK = PathSegment("lobby", "lift_g", 12.0, "walkway", id="w", is_accessible=True)
RIDE = PathSegment("lift_g", "lift_1", 0.0, "elevator", id="e", is_accessible=False, duration_estimate=40.0)


def _search() -> SearchResult:
    return SearchResult(
        origin_id="lobby",
        destination_id="lift_1",
        distances={"lobby": 0.0, "lift_g": 12.0, "lift_1": 27.0},
        predecessors={
            "lift_g": Predecessor(prev_node_id="lobby", segment=WALK),
            "lift_1": Predecessor(prev_node_id="lift_g", segment=RIDE),
        },
    )


def test_reconstruct_route_orders_segments_and_sums_raw_distance() -> None:
    route = reconstruct_route(_search(), NODES, accessibility_requested=False, preference_type="shortest")

    assert [seg.id for seg in route.segments] == ["w", "e"]
    # Penalties are excluded from the user-facing distance.
    assert route.total_distance == pytest.approx(12.0)
    assert route.estimated_duration == pytest.approx(12.0 * 0.8 + 40.0)
    assert route.preference_type == "shortest"
    assert route.id.startswith("route_")


def test_reconstruct_route_accessibility_only_certified_when_requested() -> None:
    relaxed = reconstruct_route(_search(), NODES, accessibility_requested=False, preference_type="shortest")
    strict = reconstruct_route(_search(), NODES, accessibility_requested=True, preference_type="accessible")

    assert relaxed.is_accessible is True
    assert strict.is_accessible is False


def test_reconstruct_route_broken_chain_raises() -> None:
    search = _search()
    del search.predecessors["lift_g"]

    with pytest.raises(RouteReconstructionError, match="No predecessor"):
        reconstruct_route(search, NODES, accessibility_requested=False, preference_type="shortest")


def test_render_instructions_per_segment_type() -> None:
    route = reconstruct_route(_search(), NODES, accessibility_requested=False, preference_type="shortest")

    assert route.instructions == [
        "Walk from Lobby to Lift (12m).",
        "Take Elevator from Lift (Level 0) to Lift (Level 1) (0m).",
    ]


@pytest.mark.parametrize(
    ("seg_type", "expected"),
    [
        ("escalator", "Take Escalator from Lobby (Level 0) to Lift (Level 1) (7.5m)."),
        ("stairs", "Use Stairs from Lobby (Level 0) to Lift (Level 1) (7.5m)."),
    ],
)
def test_render_instruction_level_change_templates(seg_type: str, expected: str) -> None:
    seg = PathSegment("lobby", "lift_1", 7.5, seg_type)
    assert render_instruction(seg, LOBBY, LIFT_1) == expected


def test_render_instruction_missing_pois_fall_back() -> None:
    walk = PathSegment("x", "y", 3.0, "walkway")
    stairs = PathSegment("x", "y", 4.0, "stairs")

    assert render_instruction(walk, None, None) == "Walk from previous point to next point (3m)."
    assert render_instruction(stairs, None, None) == (
        "Use Stairs from previous point (Level 0) to next point (Level 0) (4m)."
    )
