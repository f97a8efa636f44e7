"""Layout loading from JSON-compatible payloads.

Purpose:
- Parse camelCase layout payloads into immutable model objects.
- Provide async layout sources (bundled sample, JSON directory).

Payload schema (per floor):
    {
      "level": 0,
      "name": "Ground Floor",
      "mapImageUrl": "...",                      # optional
      "pois": [{"id", "name", "type", "coordinates": {"x", "y", "level"}, ...}],
      "paths": [{"id"?, "fromPOIId", "toPOIId", "distance", "type",
                 "isAccessible"?, "durationEstimate"?}]
    }
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Protocol

from wayfinder.layout_validation import validate_layout
from wayfinder.logging_utils import log_event
from wayfinder.models import (
    Coordinates,
    MallFloor,
    MallLayout,
    PathSegment,
    PointOfInterest,
    StoreDetails,
)
from wayfinder.sample_data import SAMPLE_LAYOUT, SAMPLE_LAYOUT_ID


class LayoutNotFoundError(LookupError):
    """Requested layout id is unknown to the source."""


class LayoutSource(Protocol):
    async def load_layout(self, layout_id: str) -> MallLayout: ...


def _require(item: dict[str, Any], keys: set[str], label: str) -> None:
    if not isinstance(item, dict):
        raise ValueError(f"{label} must be an object")
    missing = keys - item.keys()
    if missing:
        raise ValueError(f"{label} must include {', '.join(sorted(missing))}")


def _parse_poi(item: dict[str, Any], label: str) -> PointOfInterest:
    _require(item, {"id", "name", "type", "coordinates"}, label)

    coords = item["coordinates"]
    _require(coords, {"x", "y", "level"}, f"{label}.coordinates")

    store_details = None
    raw_details = item.get("storeDetails")
    if raw_details is not None:
        if not isinstance(raw_details, dict):
            raise ValueError(f"{label}.storeDetails must be an object")
        store_details = StoreDetails(
            category=raw_details.get("category"),
            logo_url=raw_details.get("logoUrl"),
            promotions=tuple(str(p) for p in raw_details.get("promotions", [])),
        )

    return PointOfInterest(
        id=str(item["id"]),
        name=str(item["name"]),
        type=str(item["type"]),
        coordinates=Coordinates(x=float(coords["x"]), y=float(coords["y"]), level=int(coords["level"])),
        description=item.get("description"),
        tags=tuple(str(t) for t in item.get("tags", [])),
        store_details=store_details,
    )


def _parse_segment(item: dict[str, Any], label: str, levels: dict[str, int]) -> PathSegment:
    _require(item, {"fromPOIId", "toPOIId", "distance", "type"}, label)

    from_id = str(item["fromPOIId"])
    to_id = str(item["toPOIId"])
    seg_type = str(item["type"])

    is_accessible = item.get("isAccessible")
    if is_accessible is None:
        # Unstated accessibility is assumed only for flat walkways.
        is_accessible = (
            seg_type == "walkway"
            and from_id in levels
            and to_id in levels
            and levels[from_id] == levels[to_id]
        )

    duration = item.get("durationEstimate")

    segment_id = item.get("id")
    return PathSegment(
        id=str(segment_id) if segment_id is not None else None,
        from_poi_id=from_id,
        to_poi_id=to_id,
        distance=float(item["distance"]),
        type=seg_type,
        is_accessible=bool(is_accessible),
        duration_estimate=float(duration) if duration is not None else None,
    )


def parse_layout(payload: dict[str, Any], strict: bool = True) -> MallLayout:
    """Parse a layout payload into a MallLayout.

    Args:
        payload: JSON-compatible layout dictionary.
        strict: Raise when validation reports errors (dangling segments,
            duplicate ids or levels).

    Returns:
        Parsed MallLayout.

    Raises:
        ValueError: If payload shape or values are invalid.
    """
    _require(payload, {"id", "name", "floors"}, "layout")
    if not isinstance(payload["floors"], list):
        raise ValueError("layout.floors must be a list")

    # First pass: POI levels so default accessibility can look across floors.
    raw_floors: list[tuple[dict[str, Any], list[PointOfInterest]]] = []
    levels: dict[str, int] = {}
    for f_idx, raw_floor in enumerate(payload["floors"]):
        label = f"floors[{f_idx}]"
        _require(raw_floor, {"level", "name"}, label)
        pois = [_parse_poi(p, f"{label}.pois[{p_idx}]") for p_idx, p in enumerate(raw_floor.get("pois", []))]
        for poi in pois:
            levels[poi.id] = poi.level
        raw_floors.append((raw_floor, pois))

    floors: list[MallFloor] = []
    for f_idx, (raw_floor, pois) in enumerate(raw_floors):
        paths = [
            _parse_segment(s, f"floors[{f_idx}].paths[{s_idx}]", levels)
            for s_idx, s in enumerate(raw_floor.get("paths", []))
        ]
        floors.append(
            MallFloor(
                level=int(raw_floor["level"]),
                name=str(raw_floor["name"]),
                pois=tuple(pois),
                paths=tuple(paths),
                map_image_url=raw_floor.get("mapImageUrl"),
            )
        )

    layout = MallLayout(id=str(payload["id"]), name=str(payload["name"]), floors=tuple(floors))

    report = validate_layout(layout)
    if report["summary"]["warnings"]:
        log_event(
            "layout_validation_warnings",
            level=logging.WARNING,
            layout_id=layout.id,
            warnings=report["summary"]["warnings"],
        )
    if strict and not report["ok"]:
        errors = [issue["message"] for issue in report["issues"] if issue["severity"] == "error"]
        raise ValueError(f"Layout '{layout.id}' failed validation: {'; '.join(errors)}")

    return layout


def sample_layout() -> MallLayout:
    """Return the bundled demo venue."""
    return parse_layout(SAMPLE_LAYOUT)


class BundledLayoutSource:
    """Serves layouts compiled into the package."""

    def __init__(self, payloads: dict[str, dict[str, Any]] | None = None) -> None:
        self._payloads = payloads if payloads is not None else {SAMPLE_LAYOUT_ID: SAMPLE_LAYOUT}

    async def load_layout(self, layout_id: str) -> MallLayout:
        payload = self._payloads.get(layout_id)
        if payload is None:
            raise LayoutNotFoundError(f"Mall layout '{layout_id}' not found")
        return parse_layout(payload)


class JsonDirectoryLayoutSource:
    """Loads `<directory>/<layout_id>.json` files."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _read(self, layout_id: str) -> dict[str, Any]:
        if not layout_id or Path(layout_id).name != layout_id:
            raise LayoutNotFoundError(f"Invalid layout id '{layout_id}'")
        path = self.directory / f"{layout_id}.json"
        if not path.exists():
            raise LayoutNotFoundError(f"Mall layout '{layout_id}' not found in {self.directory}")
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Layout file {path.name} is not valid JSON") from exc

    async def load_layout(self, layout_id: str) -> MallLayout:
        payload = await asyncio.to_thread(self._read, layout_id)
        return parse_layout(payload)
