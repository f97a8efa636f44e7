"""Wayfinding engine: layout, preferences and cached graph for one session.

Usage example:
    >>> engine = NavigationEngine(sample_layout())
    >>> route = engine.find_route("g_entrance_1", "g_restroom_1")
    >>> route.total_distance
    30.0
"""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any, Iterable

from wayfinder.graph import Graph, GraphView, build_navigation_graph, with_closures
from wayfinder.layouts import LayoutSource
from wayfinder.logging_utils import log_event
from wayfinder.models import (
    PREFERENCE_TYPES,
    Closure,
    MallLayout,
    NavigationUserPreferences,
    PointOfInterest,
    Route,
)
from wayfinder.routes import arrival_route, reconstruct_route
from wayfinder.solver import shortest_path
from wayfinder.utils import preferences_to_dict

_PREFERENCE_FIELDS = frozenset(f.name for f in dataclasses.fields(NavigationUserPreferences))


def _serialize_preferences(preferences: NavigationUserPreferences) -> str:
    return json.dumps(preferences_to_dict(preferences), sort_keys=True)


class NavigationEngine:
    """Routes between POIs of one loaded layout.

    The engine owns its layout, preferences and cached graph; callers create
    one engine per navigating session.
    """

    def __init__(
        self,
        layout: MallLayout | None = None,
        preferences: NavigationUserPreferences | None = None,
    ) -> None:
        self._layout = layout
        self._preferences = preferences or NavigationUserPreferences()
        self._graph: Graph | None = None
        if layout is not None:
            self._graph = build_navigation_graph(layout, self._preferences)

    @property
    def graph(self) -> Graph | None:
        """Cached base graph built for the stored preferences."""
        return self._graph

    async def load_mall_layout(self, source: LayoutSource, layout_id: str) -> MallLayout:
        """Load a layout from `source`, install it and rebuild the graph.

        Loader errors propagate unchanged and leave the current layout in place.
        """
        layout = await source.load_layout(layout_id)
        self._layout = layout
        self._graph = build_navigation_graph(layout, self._preferences)
        log_event("layout_loaded", layout_id=layout.id, floors=len(layout.floors))
        return layout

    def get_mall_layout(self) -> MallLayout | None:
        return self._layout

    def get_all_pois(self, floor_level: int | None = None) -> list[PointOfInterest]:
        """List POIs of one floor, or of the whole venue when no level is given."""
        if self._layout is None:
            return []
        if floor_level is not None:
            floor = self._layout.get_floor(floor_level)
            return list(floor.pois) if floor else []
        return list(self._layout.iter_pois())

    def get_poi_by_id(self, poi_id: str) -> PointOfInterest | None:
        if self._graph is not None and poi_id in self._graph.nodes:
            return self._graph.nodes[poi_id]
        if self._layout is None:
            return None
        for poi in self._layout.iter_pois():
            if poi.id == poi_id:
                return poi
        return None

    def get_user_preferences(self) -> NavigationUserPreferences:
        return self._preferences

    def update_user_preferences(self, **changes: Any) -> None:
        """Merge `changes` into stored preferences.

        The graph is rebuilt only when the serialized preference state changed.

        Raises:
            ValueError: On unknown preference names or invalid values.
        """
        unknown = set(changes) - _PREFERENCE_FIELDS
        if unknown:
            raise ValueError(f"Unknown preference(s): {', '.join(sorted(unknown))}")

        before = _serialize_preferences(self._preferences)
        self._preferences = dataclasses.replace(self._preferences, **changes)
        after = _serialize_preferences(self._preferences)

        if before != after and self._layout is not None:
            log_event("preferences_changed_rebuilding_graph", preferences=preferences_to_dict(self._preferences))
            self._graph = build_navigation_graph(self._layout, self._preferences)

    def _active_preferences(self, preference_type: str | None) -> NavigationUserPreferences:
        if preference_type is not None and preference_type not in PREFERENCE_TYPES:
            raise ValueError(f"Unsupported preference type '{preference_type}'")
        if preference_type == "accessible":
            return dataclasses.replace(self._preferences, prefer_accessible_routes=True)
        return self._preferences

    def _route_on(
        self,
        graph: GraphView,
        origin_id: str,
        destination_id: str,
        preference_type: str | None,
    ) -> Route | None:
        active = self._active_preferences(preference_type)
        label = preference_type or active.preferred_mode or "shortest"

        if not graph.has_node(origin_id) or not graph.has_node(destination_id):
            log_event(
                "poi_not_found",
                level=logging.WARNING,
                origin_id=origin_id,
                destination_id=destination_id,
            )
            return None

        if origin_id == destination_id:
            return arrival_route(origin_id, label)

        search = shortest_path(graph, origin_id, destination_id, active)
        if search is None:
            # Constraints are never relaxed here; callers decide whether to retry.
            log_event(
                "no_route_found",
                level=logging.WARNING,
                origin_id=origin_id,
                destination_id=destination_id,
                preferences=preferences_to_dict(active),
            )
            return None

        return reconstruct_route(
            search,
            graph.nodes,
            accessibility_requested=active.prefer_accessible_routes,
            preference_type=label,
        )

    def find_route(
        self,
        origin_id: str,
        destination_id: str,
        preference_type: str | None = None,
    ) -> Route | None:
        """Compute the lowest-cost route between two POIs.

        Args:
            origin_id: Start POI id.
            destination_id: Goal POI id.
            preference_type: Optional one-off override: "shortest",
                "accessible" (forces accessible segments for this call) or
                "least_crowded".

        Returns:
            Route, or None when no layout is loaded, a POI is unknown, or no
            route satisfies the active preferences.

        Raises:
            ValueError: If `preference_type` is not supported.
        """
        if self._graph is None:
            log_event("layout_not_loaded", level=logging.ERROR)
            return None
        return self._route_on(self._graph, origin_id, destination_id, preference_type)

    def get_dynamic_route(
        self,
        origin_id: str,
        destination_id: str,
        closures: Iterable[Closure] = (),
        preference_type: str | None = None,
    ) -> Route | None:
        """Compute a route while treating `closures` as temporarily removed.

        The cached graph is left untouched; the overlay lives for this call only.
        """
        if self._graph is None:
            log_event("layout_not_loaded", level=logging.ERROR)
            return None

        closures = list(closures)
        overlay = with_closures(self._graph, closures)
        log_event(
            "closures_applied",
            closed_pois=sorted(overlay.closed_poi_ids),
            closed_segments=sorted(overlay.closed_segment_ids),
        )

        route = self._route_on(overlay, origin_id, destination_id, preference_type)
        if route is None:
            log_event("dynamic_route_failed", level=logging.WARNING, closures=len(closures))
        return route
