"""Pytest global fixtures."""

from __future__ import annotations

from typing import Callable

import pytest

from wayfinder.engine import NavigationEngine
from wayfinder.layouts import sample_layout
from wayfinder.models import Coordinates, MallFloor, MallLayout, PathSegment, PointOfInterest


@pytest.fixture()
def sandton_layout() -> MallLayout:
    """Bundled two-floor demo venue."""
    return sample_layout()


@pytest.fixture()
def engine(sandton_layout: MallLayout) -> NavigationEngine:
    """Fresh engine with default preferences on the demo venue."""
    return NavigationEngine(sandton_layout)


@pytest.fixture()
def make_layout() -> Callable[..., MallLayout]:
    """Build a single-floor layout from POI ids and segment tuples.

    Segments are `(id, from, to, distance, type)` or with a trailing
    `is_accessible` flag.
    """

    def _make(poi_ids: list[str], segments: list[tuple], level: int = 0) -> MallLayout:
        pois = tuple(
            PointOfInterest(poi_id, poi_id.upper(), "custom", Coordinates(float(idx), 0.0, level))
            for idx, poi_id in enumerate(poi_ids)
        )
        paths = []
        for row in segments:
            seg_id, src, dst, distance, seg_type = row[:5]
            accessible = row[5] if len(row) > 5 else True
            paths.append(
                PathSegment(
                    id=seg_id,
                    from_poi_id=src,
                    to_poi_id=dst,
                    distance=float(distance),
                    type=seg_type,
                    is_accessible=accessible,
                )
            )
        floor = MallFloor(level=level, name=f"Level {level}", pois=pois, paths=tuple(paths))
        return MallLayout(id="synthetic", name="Synthetic", floors=(floor,))

    return _make
