"""Route reconstruction and turn-by-turn instruction rendering.

Purpose:
- Walk solver predecessor links back from destination to origin.
- Aggregate raw distance, duration estimate and accessibility.
- Render one human-readable instruction per segment.
"""

from __future__ import annotations

import time
from typing import Mapping, Sequence

from wayfinder.models import PathSegment, PointOfInterest, Route
from wayfinder.solver import SearchResult

# Seconds per meter when a segment carries no duration estimate.
WALKING_SECONDS_PER_METER = 0.8

ARRIVED_INSTRUCTION = "You are already at your destination."

_LEVEL_CHANGE_VERBS = {
    "elevator": "Take Elevator",
    "escalator": "Take Escalator",
    "stairs": "Use Stairs",
}


class RouteReconstructionError(RuntimeError):
    """Predecessor links do not lead back to the origin."""


def new_route_id() -> str:
    return f"route_{int(time.time() * 1000)}"


def _format_distance(distance: float) -> str:
    return f"{float(distance):g}"


def segment_duration(segment: PathSegment) -> float:
    if segment.duration_estimate is not None:
        return float(segment.duration_estimate)
    return float(segment.distance) * WALKING_SECONDS_PER_METER


def render_instruction(
    segment: PathSegment,
    from_poi: PointOfInterest | None,
    to_poi: PointOfInterest | None,
) -> str:
    """Render the instruction for one segment.

    Unknown POIs render as "previous point"/"next point" on level 0.
    """
    from_name = from_poi.name if from_poi and from_poi.name else "previous point"
    to_name = to_poi.name if to_poi and to_poi.name else "next point"
    distance = _format_distance(segment.distance)

    verb = _LEVEL_CHANGE_VERBS.get(segment.type)
    if verb is None:
        return f"Walk from {from_name} to {to_name} ({distance}m)."

    from_level = from_poi.level if from_poi else 0
    to_level = to_poi.level if to_poi else 0
    return f"{verb} from {from_name} (Level {from_level}) to {to_name} (Level {to_level}) ({distance}m)."


def render_instructions(
    segments: Sequence[PathSegment],
    nodes: Mapping[str, PointOfInterest],
) -> list[str]:
    return [render_instruction(seg, nodes.get(seg.from_poi_id), nodes.get(seg.to_poi_id)) for seg in segments]


def trace_segments(search: SearchResult) -> list[PathSegment]:
    """Return segments from origin to destination in travel order.

    Raises:
        RouteReconstructionError: If the predecessor chain breaks or cycles.
    """
    segments: list[PathSegment] = []
    current = search.destination_id
    visited = {current}

    while current != search.origin_id:
        link = search.predecessors.get(current)
        if link is None:
            raise RouteReconstructionError(
                f"No predecessor for '{current}' while tracing {search.origin_id} -> {search.destination_id}"
            )
        segments.append(link.segment)
        current = link.prev_node_id
        if current in visited:
            raise RouteReconstructionError(f"Predecessor cycle detected at '{current}'")
        visited.add(current)

    segments.reverse()
    return segments


def reconstruct_route(
    search: SearchResult,
    nodes: Mapping[str, PointOfInterest],
    *,
    accessibility_requested: bool,
    preference_type: str,
) -> Route:
    """Build a Route from a successful search.

    Args:
        search: Solver result whose destination was reached.
        nodes: POI lookup used for instruction names and levels.
        accessibility_requested: Whether the active preferences required
            accessible segments. Otherwise `is_accessible` is reported True.
        preference_type: Label recorded on the route.

    Returns:
        Route with raw distances (solver penalties are not included).
    """
    segments = trace_segments(search)
    if not segments and search.origin_id != search.destination_id:
        raise RouteReconstructionError("Empty segment list for a non-trivial route")

    all_accessible = all(bool(seg.is_accessible) for seg in segments)

    return Route(
        id=new_route_id(),
        origin_poi_id=search.origin_id,
        destination_poi_id=search.destination_id,
        segments=segments,
        total_distance=sum(float(seg.distance) for seg in segments),
        estimated_duration=sum(segment_duration(seg) for seg in segments),
        is_accessible=all_accessible if accessibility_requested else True,
        preference_type=preference_type,
        instructions=render_instructions(segments, nodes),
    )


def arrival_route(poi_id: str, preference_type: str) -> Route:
    """Zero-length route for origin == destination."""
    return Route(
        id=new_route_id(),
        origin_poi_id=poi_id,
        destination_poi_id=poi_id,
        segments=[],
        total_distance=0.0,
        estimated_duration=0.0,
        is_accessible=True,
        preference_type=preference_type,
        instructions=[ARRIVED_INSTRUCTION],
    )
