"""Core data model for indoor wayfinding.

Purpose:
- Describe venues as floors of points of interest (POIs) joined by path segments.
- Carry user mobility preferences and computed routes.

All records are immutable once loaded; preference changes produce a new object.

Usage example:
    >>> poi = PointOfInterest("g_store_a", "Fashion Store A", "store", Coordinates(20, 40, 0))
    >>> poi.level
    0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

POI_TYPES = frozenset({"store", "restroom", "elevator", "escalator", "stairs", "exit", "info", "custom"})
SEGMENT_TYPES = frozenset({"walkway", "elevator", "escalator", "stairs"})
PREFERRED_MODES = frozenset({"shortest", "least_crowded"})
PREFERENCE_TYPES = frozenset({"shortest", "accessible", "least_crowded"})


@dataclass(frozen=True, slots=True)
class Coordinates:
    """Planar position in meters plus floor index."""

    x: float
    y: float
    level: int


@dataclass(frozen=True, slots=True)
class StoreDetails:
    category: str | None = None
    logo_url: str | None = None
    promotions: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PointOfInterest:
    """Named, located place inside a venue."""

    id: str
    name: str
    type: str
    coordinates: Coordinates
    description: str | None = None
    tags: tuple[str, ...] = ()
    store_details: StoreDetails | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("POI id must be a non-empty string")
        if self.type not in POI_TYPES:
            raise ValueError(f"Unsupported POI type '{self.type}' for POI '{self.id}'")

    @property
    def x(self) -> float:
        return self.coordinates.x

    @property
    def y(self) -> float:
        return self.coordinates.y

    @property
    def level(self) -> int:
        return self.coordinates.level


@dataclass(frozen=True, slots=True)
class PathSegment:
    """Connection between two POIs.

    `is_accessible` is None when the source did not say. The graph builder
    resolves it to true for walkways between POIs on the same level.
    """

    from_poi_id: str
    to_poi_id: str
    distance: float
    type: str
    id: str | None = None
    is_accessible: bool | None = None
    duration_estimate: float | None = None

    def __post_init__(self) -> None:
        if self.type not in SEGMENT_TYPES:
            raise ValueError(f"Unsupported segment type '{self.type}'")
        if self.distance < 0:
            raise ValueError(f"Segment distance must be >= 0 (got {self.distance})")
        if self.duration_estimate is not None and self.duration_estimate < 0:
            raise ValueError("duration_estimate must be >= 0")


@dataclass(frozen=True, slots=True)
class MallFloor:
    level: int
    name: str
    pois: tuple[PointOfInterest, ...] = ()
    paths: tuple[PathSegment, ...] = ()
    map_image_url: str | None = None


@dataclass(frozen=True, slots=True)
class MallLayout:
    """Complete floor/POI/segment graph for one venue."""

    id: str
    name: str
    floors: tuple[MallFloor, ...] = ()

    def iter_pois(self) -> Iterator[PointOfInterest]:
        """Yield every POI across all floors in floor order."""
        for floor in self.floors:
            yield from floor.pois

    def iter_paths(self) -> Iterator[PathSegment]:
        """Yield every path segment across all floors in floor order."""
        for floor in self.floors:
            yield from floor.paths

    def get_floor(self, level: int) -> MallFloor | None:
        for floor in self.floors:
            if floor.level == level:
                return floor
        return None


@dataclass(frozen=True, slots=True)
class NavigationUserPreferences:
    """Mobility preferences applied when weighting segments."""

    prefer_accessible_routes: bool = False
    avoid_stairs: bool = False
    avoid_escalators: bool = False
    preferred_mode: str | None = None

    def __post_init__(self) -> None:
        for name in ("prefer_accessible_routes", "avoid_stairs", "avoid_escalators"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"Preference '{name}' must be a bool (got {value!r})")
        if self.preferred_mode is not None and self.preferred_mode not in PREFERRED_MODES:
            raise ValueError(f"Unsupported preferred_mode '{self.preferred_mode}'")


@dataclass(frozen=True, slots=True)
class Closure:
    """Temporary removal of one POI or one path segment from routing."""

    poi_id: str | None = None
    path_segment_id: str | None = None

    def __post_init__(self) -> None:
        if (self.poi_id is None) == (self.path_segment_id is None):
            raise ValueError("Closure needs exactly one of poi_id or path_segment_id")


@dataclass(slots=True)
class Route:
    """Computed route with ordered segments and turn-by-turn instructions."""

    id: str
    origin_poi_id: str
    destination_poi_id: str
    segments: list[PathSegment]
    total_distance: float
    estimated_duration: float
    is_accessible: bool
    preference_type: str
    instructions: list[str] = field(default_factory=list)
