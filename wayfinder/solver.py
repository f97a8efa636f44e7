"""Dijkstra shortest-path search over navigation graphs.

Edge weights are recomputed from the active preferences while searching, so a
one-off override (for example an accessible-only request) needs no rebuild.
"""

from __future__ import annotations

import heapq
import itertools
import math
from dataclasses import dataclass, field

from wayfinder.graph import GraphView
from wayfinder.models import NavigationUserPreferences, PathSegment
from wayfinder.weights import IMPASSABLE, edge_weight


@dataclass(frozen=True, slots=True)
class Predecessor:
    """Segment that led to a node on its best known path."""

    prev_node_id: str
    segment: PathSegment


@dataclass(slots=True)
class SearchResult:
    """Distances and predecessor links from a completed search."""

    origin_id: str
    destination_id: str
    distances: dict[str, float] = field(default_factory=dict)
    predecessors: dict[str, Predecessor] = field(default_factory=dict)

    @property
    def cost(self) -> float:
        return self.distances[self.destination_id]


def shortest_path(
    graph: GraphView,
    origin_id: str,
    destination_id: str,
    active_preferences: NavigationUserPreferences,
) -> SearchResult | None:
    """Run Dijkstra from origin until the destination is settled.

    Args:
        graph: Base graph or closure overlay.
        origin_id: Start POI id.
        destination_id: Goal POI id.
        active_preferences: Preferences applied to every edge in this search.

    Returns:
        SearchResult when the destination is reachable, otherwise None.
    """
    if not graph.has_node(origin_id) or not graph.has_node(destination_id):
        return None

    distances: dict[str, float] = {node_id: math.inf for node_id in graph.nodes if graph.has_node(node_id)}
    distances[origin_id] = 0.0
    predecessors: dict[str, Predecessor] = {}

    # Counter keeps equal priorities first-in-first-out.
    counter = itertools.count()
    open_heap: list[tuple[float, int, str]] = [(0.0, next(counter), origin_id)]
    settled: set[str] = set()

    while open_heap:
        _, _, current = heapq.heappop(open_heap)

        if current in settled:
            continue
        if current == destination_id:
            return SearchResult(
                origin_id=origin_id,
                destination_id=destination_id,
                distances=distances,
                predecessors=predecessors,
            )

        current_distance = distances[current]
        if current_distance == math.inf:
            continue
        settled.add(current)

        for edge in graph.edges_from(current):
            neighbor = edge.to_node_id
            if neighbor in settled:
                continue

            weight = edge_weight(edge.segment, active_preferences)
            if weight == IMPASSABLE:
                continue

            tentative = current_distance + weight
            if tentative < distances.get(neighbor, math.inf):
                distances[neighbor] = tentative
                predecessors[neighbor] = Predecessor(prev_node_id=current, segment=edge.segment)
                heapq.heappush(open_heap, (tentative, next(counter), neighbor))

    return None
