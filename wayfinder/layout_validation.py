"""Layout quality gates run before a venue graph is built."""

from __future__ import annotations

from typing import Any

from shapely.geometry import Point

from wayfinder.models import MallLayout, PointOfInterest

# Authored distances may undercut the straight line by this much before warning.
DISTANCE_TOLERANCE_M = 0.5


def _poi_point(poi: PointOfInterest) -> Point:
    return Point(float(poi.x), float(poi.y))


def validate_layout(layout: MallLayout, distance_tolerance_m: float = DISTANCE_TOLERANCE_M) -> dict[str, Any]:
    """Validate identity, reference and geometry consistency of a layout."""
    issues: list[dict[str, Any]] = []
    poi_checks = 0
    segment_checks = 0

    seen_levels: set[int] = set()
    pois: dict[str, PointOfInterest] = {}

    for floor in layout.floors:
        if floor.level in seen_levels:
            issues.append(
                {
                    "kind": "duplicate_floor_level",
                    "severity": "error",
                    "floor": floor.level,
                    "message": f"Floor level {floor.level} is defined more than once",
                }
            )
        seen_levels.add(floor.level)

        for poi in floor.pois:
            poi_checks += 1
            if poi.id in pois:
                issues.append(
                    {
                        "kind": "duplicate_poi_id",
                        "severity": "error",
                        "floor": floor.level,
                        "poi_id": poi.id,
                        "message": "POI ids must be unique across all floors",
                    }
                )
            pois[poi.id] = poi

            if poi.level != floor.level:
                issues.append(
                    {
                        "kind": "poi_level_mismatch",
                        "severity": "warning",
                        "floor": floor.level,
                        "poi_id": poi.id,
                        "message": f"POI level {poi.level} differs from floor level {floor.level}",
                    }
                )

    for floor in layout.floors:
        for segment in floor.paths:
            segment_checks += 1
            missing = [pid for pid in (segment.from_poi_id, segment.to_poi_id) if pid not in pois]
            if missing:
                issues.append(
                    {
                        "kind": "dangling_segment",
                        "severity": "error",
                        "floor": floor.level,
                        "segment_id": segment.id,
                        "message": f"Segment references unknown POI(s): {', '.join(missing)}",
                    }
                )
                continue

            from_poi = pois[segment.from_poi_id]
            to_poi = pois[segment.to_poi_id]
            if from_poi.level != to_poi.level:
                continue

            straight_m = _poi_point(from_poi).distance(_poi_point(to_poi))
            if float(segment.distance) + distance_tolerance_m < straight_m:
                issues.append(
                    {
                        "kind": "distance_below_straight_line",
                        "severity": "warning",
                        "floor": floor.level,
                        "segment_id": segment.id,
                        "message": (
                            f"Authored distance {segment.distance}m is shorter than the "
                            f"{straight_m:.2f}m straight line between endpoints"
                        ),
                    }
                )

    error_count = sum(1 for issue in issues if issue.get("severity") == "error")
    warning_count = sum(1 for issue in issues if issue.get("severity") == "warning")

    return {
        "ok": error_count == 0,
        "summary": {
            "floors": len(layout.floors),
            "poi_checks": poi_checks,
            "segment_checks": segment_checks,
            "errors": error_count,
            "warnings": warning_count,
        },
        "issues": issues,
    }
