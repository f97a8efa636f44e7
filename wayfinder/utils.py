"""Conversion of model objects to JSON-compatible payloads.

Field names follow the camelCase layout/route format shared with clients.
"""

from __future__ import annotations

from typing import Any

from wayfinder.models import (
    MallFloor,
    MallLayout,
    NavigationUserPreferences,
    PathSegment,
    PointOfInterest,
    Route,
)


def poi_to_dict(poi: PointOfInterest) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": poi.id,
        "name": poi.name,
        "type": poi.type,
        "coordinates": {"x": poi.x, "y": poi.y, "level": poi.level},
    }
    if poi.description is not None:
        payload["description"] = poi.description
    if poi.tags:
        payload["tags"] = list(poi.tags)
    if poi.store_details is not None:
        details = poi.store_details
        payload["storeDetails"] = {
            key: value
            for key, value in (
                ("category", details.category),
                ("logoUrl", details.logo_url),
                ("promotions", list(details.promotions) or None),
            )
            if value is not None
        }
    return payload


def segment_to_dict(segment: PathSegment) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "fromPOIId": segment.from_poi_id,
        "toPOIId": segment.to_poi_id,
        "distance": segment.distance,
        "type": segment.type,
        "isAccessible": bool(segment.is_accessible),
    }
    if segment.id is not None:
        payload["id"] = segment.id
    if segment.duration_estimate is not None:
        payload["durationEstimate"] = segment.duration_estimate
    return payload


def floor_to_dict(floor: MallFloor) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "level": floor.level,
        "name": floor.name,
        "pois": [poi_to_dict(poi) for poi in floor.pois],
        "paths": [segment_to_dict(seg) for seg in floor.paths],
    }
    if floor.map_image_url is not None:
        payload["mapImageUrl"] = floor.map_image_url
    return payload


def layout_to_dict(layout: MallLayout) -> dict[str, Any]:
    """Serialize a layout into the same shape `parse_layout` accepts."""
    return {
        "id": layout.id,
        "name": layout.name,
        "floors": [floor_to_dict(floor) for floor in layout.floors],
    }


def preferences_to_dict(preferences: NavigationUserPreferences) -> dict[str, Any]:
    return {
        "preferAccessibleRoutes": preferences.prefer_accessible_routes,
        "avoidStairs": preferences.avoid_stairs,
        "avoidEscalators": preferences.avoid_escalators,
        "preferredMode": preferences.preferred_mode,
    }


def route_to_dict(route: Route) -> dict[str, Any]:
    return {
        "id": route.id,
        "originPOIId": route.origin_poi_id,
        "destinationPOIId": route.destination_poi_id,
        "segments": [segment_to_dict(seg) for seg in route.segments],
        "totalDistance": route.total_distance,
        "estimatedDuration": route.estimated_duration,
        "isAccessible": route.is_accessible,
        "preferenceType": route.preference_type,
        "instructions": list(route.instructions),
    }
