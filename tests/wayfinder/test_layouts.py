"""Unit tests for layout parsing, sources and validation."""

from __future__ import annotations

import asyncio
import copy
import json
from pathlib import Path

import pytest

from wayfinder.layout_validation import validate_layout
from wayfinder.layouts import (
    BundledLayoutSource,
    JsonDirectoryLayoutSource,
    LayoutNotFoundError,
    parse_layout,
)
from wayfinder.models import MallLayout
from wayfinder.sample_data import SAMPLE_LAYOUT
from wayfinder.utils import layout_to_dict


def _payload() -> dict:
    return copy.deepcopy(SAMPLE_LAYOUT)


def test_parse_layout_builds_floors_and_segments() -> None:
    layout = parse_layout(_payload())

    assert layout.id == "sandton_city_01"
    assert [floor.level for floor in layout.floors] == [0, 1]
    assert len(list(layout.iter_pois())) == 11
    assert len(list(layout.iter_paths())) == 14
    elevator = next(seg for seg in layout.iter_paths() if seg.id == "p_g_el1_l1_el1")
    assert elevator.type == "elevator"
    assert elevator.is_accessible is True


def test_parse_layout_defaults_accessibility_for_flat_walkways_only() -> None:
    payload = _payload()
    for seg in payload["floors"][1]["paths"]:
        seg.pop("isAccessible", None)

    layout = parse_layout(payload)
    by_id = {seg.id: seg for seg in layout.iter_paths()}

    assert by_id["pl1_el1_sc"].is_accessible is True
    assert by_id["p_g_el1_l1_el1"].is_accessible is False
    assert by_id["p_g_escu1_l1_escd1"].is_accessible is False


def test_parse_layout_missing_keys_raise() -> None:
    payload = _payload()
    del payload["floors"][0]["paths"][0]["distance"]

    with pytest.raises(ValueError, match=r"floors\[0\]\.paths\[0\] must include distance"):
        parse_layout(payload)


def test_parse_layout_rejects_bad_enum_values() -> None:
    payload = _payload()
    payload["floors"][0]["pois"][0]["type"] = "fountain"

    with pytest.raises(ValueError, match="Unsupported POI type"):
        parse_layout(payload)


def test_parse_layout_rejects_negative_distance() -> None:
    payload = _payload()
    payload["floors"][0]["paths"][0]["distance"] = -1

    with pytest.raises(ValueError, match=">= 0"):
        parse_layout(payload)


def test_parse_layout_rejects_dangling_segment_in_strict_mode() -> None:
    payload = _payload()
    payload["floors"][0]["paths"].append(
        {"id": "ghost", "fromPOIId": "g_store_a", "toPOIId": "nowhere", "distance": 3, "type": "walkway"}
    )

    with pytest.raises(ValueError, match="unknown POI"):
        parse_layout(payload)

    layout = parse_layout(payload, strict=False)
    assert any(seg.id == "ghost" for seg in layout.iter_paths())


def test_layout_round_trips_through_payload(sandton_layout: MallLayout) -> None:
    assert parse_layout(layout_to_dict(sandton_layout)) == sandton_layout


def test_validate_layout_demo_venue_is_clean(sandton_layout: MallLayout) -> None:
    report = validate_layout(sandton_layout)

    assert report["ok"] is True
    assert report["summary"]["errors"] == 0
    assert report["summary"]["warnings"] == 0


def test_validate_layout_flags_walkway_shorter_than_straight_line() -> None:
    payload = _payload()
    # Electronics B to Restrooms G1 is about 8.2m apart.
    payload["floors"][0]["paths"][3]["distance"] = 2
    report = validate_layout(parse_layout(payload))

    flagged = [issue for issue in report["issues"] if issue["kind"] == "distance_below_straight_line"]
    assert report["ok"] is True
    assert [issue["segment_id"] for issue in flagged] == ["pg_sb_r1"]


def test_validate_layout_reports_duplicates_and_warnings() -> None:
    payload = _payload()
    payload["floors"][1]["pois"].append(copy.deepcopy(payload["floors"][0]["pois"][0]))
    payload["floors"][1]["level"] = 0
    broken = validate_layout(parse_layout(payload, strict=False))

    kinds = {issue["kind"] for issue in broken["issues"]}
    assert broken["ok"] is False
    assert {"duplicate_poi_id", "duplicate_floor_level", "poi_level_mismatch"} <= kinds


def test_bundled_source_unknown_layout_raises() -> None:
    with pytest.raises(LayoutNotFoundError):
        asyncio.run(BundledLayoutSource().load_layout("missing"))


def test_json_directory_source_reads_layout_file(tmp_path: Path) -> None:
    (tmp_path / "sandton_city_01.json").write_text(json.dumps(SAMPLE_LAYOUT), encoding="utf-8")
    source = JsonDirectoryLayoutSource(tmp_path)

    layout = asyncio.run(source.load_layout("sandton_city_01"))

    assert layout.name == "Sandton City Shopping Centre"
    with pytest.raises(LayoutNotFoundError):
        asyncio.run(source.load_layout("other"))
    with pytest.raises(LayoutNotFoundError):
        asyncio.run(source.load_layout("../sandton_city_01"))


def test_json_directory_source_invalid_json_raises(tmp_path: Path) -> None:
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError, match="not valid JSON"):
        asyncio.run(JsonDirectoryLayoutSource(tmp_path).load_layout("broken"))
