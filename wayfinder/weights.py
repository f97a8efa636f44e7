"""Edge weight policy for preference-aware routing.

A segment's cost is its distance plus a fixed penalty for the transition type.
Segments excluded by the active preferences cost `IMPASSABLE`.
"""

from __future__ import annotations

import math

from wayfinder.models import NavigationUserPreferences, PathSegment

IMPASSABLE = math.inf

# Expected wait/transition overhead, expressed in meters.
TYPE_PENALTIES: dict[str, float] = {
    "walkway": 0.0,
    "elevator": 15.0,
    "escalator": 5.0,
    "stairs": 20.0,
}


def is_excluded(segment: PathSegment, preferences: NavigationUserPreferences) -> bool:
    """Return True when preferences forbid traversing `segment`."""
    if preferences.prefer_accessible_routes and not segment.is_accessible:
        return True
    if preferences.avoid_stairs and segment.type == "stairs":
        return True
    if preferences.avoid_escalators and segment.type == "escalator":
        return True
    return False


def edge_weight(segment: PathSegment, preferences: NavigationUserPreferences) -> float:
    """Compute traversal cost of a segment under the given preferences.

    Args:
        segment: Path segment to evaluate.
        preferences: Active preferences for this computation.

    Returns:
        `distance + type penalty`, or `IMPASSABLE` when excluded.
    """
    if is_excluded(segment, preferences):
        return IMPASSABLE
    return float(segment.distance) + TYPE_PENALTIES[segment.type]
