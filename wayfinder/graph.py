"""Navigation graph construction and closure overlays.

Purpose:
- Compile a `MallLayout` into nodes plus outgoing weighted edges.
- Synthesize reverse edges for walkways, which are bidirectional by nature.
- Expose closures as a read-only view over an unchanged base graph.

Usage example:
    >>> graph = build_navigation_graph(layout, NavigationUserPreferences())
    >>> overlay = with_closures(graph, [Closure(poi_id="g_elevator_1")])
    >>> overlay.has_node("g_elevator_1")
    False
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from wayfinder.logging_utils import log_event
from wayfinder.models import Closure, MallLayout, NavigationUserPreferences, PathSegment, PointOfInterest
from wayfinder.weights import edge_weight


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """Directed edge with the weight computed at build time."""

    from_node_id: str
    to_node_id: str
    segment: PathSegment
    weight: float


class GraphView(Protocol):
    """Read interface shared by base graphs and closure overlays."""

    nodes: dict[str, PointOfInterest]

    def has_node(self, node_id: str) -> bool: ...

    def edges_from(self, node_id: str) -> Iterable[GraphEdge]: ...


@dataclass(slots=True)
class Graph:
    """Adjacency-list graph keyed by POI id."""

    nodes: dict[str, PointOfInterest] = field(default_factory=dict)
    adjacency: dict[str, list[GraphEdge]] = field(default_factory=dict)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def edges_from(self, node_id: str) -> Iterable[GraphEdge]:
        return self.adjacency.get(node_id, [])

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self.adjacency.values())


def reverse_segment(segment: PathSegment) -> PathSegment:
    """Copy a segment with swapped endpoints, keeping its id."""
    return dataclasses.replace(segment, from_poi_id=segment.to_poi_id, to_poi_id=segment.from_poi_id)


def with_default_accessibility(segment: PathSegment, nodes: dict[str, PointOfInterest]) -> PathSegment:
    """Resolve an unstated accessibility flag: true only for flat walkways."""
    if segment.is_accessible is not None:
        return segment
    flat = segment.type == "walkway" and nodes[segment.from_poi_id].level == nodes[segment.to_poi_id].level
    return dataclasses.replace(segment, is_accessible=flat)


def build_navigation_graph(layout: MallLayout, preferences: NavigationUserPreferences) -> Graph:
    """Compile a layout into a weighted adjacency list.

    Args:
        layout: Venue layout. Never mutated.
        preferences: Preferences used for the stored edge weights.

    Returns:
        New Graph with one node per POI and one edge per segment direction.
    """
    graph = Graph()

    # All POIs first so inter-floor segments listed on any floor resolve.
    for poi in layout.iter_pois():
        graph.nodes[poi.id] = poi
        graph.adjacency[poi.id] = []

    for segment in layout.iter_paths():
        if segment.from_poi_id not in graph.nodes or segment.to_poi_id not in graph.nodes:
            log_event(
                "segment_skipped_unknown_endpoint",
                level=logging.WARNING,
                segment_id=segment.id,
                from_poi_id=segment.from_poi_id,
                to_poi_id=segment.to_poi_id,
            )
            continue

        segment = with_default_accessibility(segment, graph.nodes)
        graph.adjacency[segment.from_poi_id].append(
            GraphEdge(
                from_node_id=segment.from_poi_id,
                to_node_id=segment.to_poi_id,
                segment=segment,
                weight=edge_weight(segment, preferences),
            )
        )

        if segment.type == "walkway":
            backward = reverse_segment(segment)
            graph.adjacency[backward.from_poi_id].append(
                GraphEdge(
                    from_node_id=backward.from_poi_id,
                    to_node_id=backward.to_poi_id,
                    segment=backward,
                    weight=edge_weight(backward, preferences),
                )
            )

    return graph


@dataclass(frozen=True, slots=True)
class ClosureOverlay:
    """Base graph seen through a set of closed POIs and segments."""

    base: Graph
    closed_poi_ids: frozenset[str] = frozenset()
    closed_segment_ids: frozenset[str] = frozenset()

    @property
    def nodes(self) -> dict[str, PointOfInterest]:
        # Endpoint POIs are still needed to name instruction steps.
        return self.base.nodes

    def has_node(self, node_id: str) -> bool:
        return node_id not in self.closed_poi_ids and self.base.has_node(node_id)

    def edges_from(self, node_id: str) -> Iterable[GraphEdge]:
        if node_id in self.closed_poi_ids:
            return
        for edge in self.base.edges_from(node_id):
            if edge.to_node_id in self.closed_poi_ids:
                continue
            if edge.segment.id is not None and edge.segment.id in self.closed_segment_ids:
                continue
            yield edge


def with_closures(graph: Graph, closures: Iterable[Closure]) -> ClosureOverlay:
    """Build a disposable overlay excluding closed POIs and segments.

    Closures referencing POIs outside the graph are ignored, matching the
    behavior of an already-absent node.
    """
    poi_ids: set[str] = set()
    segment_ids: set[str] = set()
    for closure in closures:
        if closure.poi_id is not None:
            if graph.has_node(closure.poi_id):
                poi_ids.add(closure.poi_id)
        elif closure.path_segment_id is not None:
            segment_ids.add(closure.path_segment_id)

    return ClosureOverlay(
        base=graph,
        closed_poi_ids=frozenset(poi_ids),
        closed_segment_ids=frozenset(segment_ids),
    )
