"""Unit tests for wayfinder.solver."""

from __future__ import annotations

import math
import random

import pytest

from wayfinder.graph import Graph, build_navigation_graph
from wayfinder.models import NavigationUserPreferences
from wayfinder.solver import shortest_path
from wayfinder.weights import edge_weight

SEGMENT_TYPES = ["walkway", "walkway", "elevator", "escalator", "stairs"]


def _brute_force_cost(graph: Graph, origin: str, goal: str, prefs: NavigationUserPreferences) -> float:
    """Cheapest simple-path cost by exhaustive DFS."""
    best = math.inf

    def visit(node: str, cost: float, seen: set[str]) -> None:
        nonlocal best
        if node == goal:
            best = min(best, cost)
            return
        for edge in graph.edges_from(node):
            if edge.to_node_id in seen:
                continue
            weight = edge_weight(edge.segment, prefs)
            if math.isinf(weight):
                continue
            seen.add(edge.to_node_id)
            visit(edge.to_node_id, cost + weight, seen)
            seen.remove(edge.to_node_id)

    visit(origin, 0.0, {origin})
    return best


def _random_layout(make_layout, seed: int):
    rng = random.Random(seed)
    node_count = rng.randint(3, 8)
    poi_ids = [f"n{i}" for i in range(node_count)]
    segments = []
    for idx in range(rng.randint(node_count, node_count * 2)):
        src, dst = rng.sample(poi_ids, 2)
        segments.append(
            (f"s{idx}", src, dst, rng.randint(1, 30), rng.choice(SEGMENT_TYPES), rng.random() > 0.3)
        )
    return make_layout(poi_ids, segments), poi_ids


@pytest.mark.parametrize("seed", range(12))
def test_shortest_path_matches_brute_force(make_layout, seed: int) -> None:
    """Dijkstra cost equals exhaustive search on small random graphs."""
    layout, poi_ids = _random_layout(make_layout, seed)
    for prefs in (
        NavigationUserPreferences(),
        NavigationUserPreferences(avoid_stairs=True, prefer_accessible_routes=True),
    ):
        graph = build_navigation_graph(layout, prefs)
        for origin in poi_ids:
            for goal in poi_ids:
                if origin == goal:
                    continue
                expected = _brute_force_cost(graph, origin, goal, prefs)
                result = shortest_path(graph, origin, goal, prefs)
                if math.isinf(expected):
                    assert result is None
                else:
                    assert result is not None
                    assert result.cost == pytest.approx(expected)


def test_shortest_path_unknown_nodes_return_none(make_layout) -> None:
    layout = make_layout(["a", "b"], [("s1", "a", "b", 5, "walkway")])
    graph = build_navigation_graph(layout, NavigationUserPreferences())

    assert shortest_path(graph, "a", "zzz", NavigationUserPreferences()) is None
    assert shortest_path(graph, "zzz", "a", NavigationUserPreferences()) is None


def test_shortest_path_uses_active_preferences_not_build_weights(make_layout) -> None:
    """Graph built without restrictions still honors a stricter active set."""
    layout = make_layout(
        ["a", "b", "c"],
        [("stairs", "a", "c", 1, "stairs"), ("w1", "a", "b", 30, "walkway"), ("w2", "b", "c", 30, "walkway")],
    )
    graph = build_navigation_graph(layout, NavigationUserPreferences())

    relaxed = shortest_path(graph, "a", "c", NavigationUserPreferences())
    strict = shortest_path(graph, "a", "c", NavigationUserPreferences(avoid_stairs=True))

    assert relaxed is not None and relaxed.cost == pytest.approx(21.0)
    assert strict is not None and strict.cost == pytest.approx(60.0)
    assert strict.predecessors["c"].segment.id == "w2"


def test_shortest_path_respects_segment_direction(make_layout) -> None:
    layout = make_layout(["a", "b"], [("lift", "a", "b", 0, "elevator")])
    graph = build_navigation_graph(layout, NavigationUserPreferences())

    assert shortest_path(graph, "a", "b", NavigationUserPreferences()) is not None
    assert shortest_path(graph, "b", "a", NavigationUserPreferences()) is None


def test_shortest_path_all_routes_excluded_returns_none(make_layout) -> None:
    layout = make_layout(["a", "b"], [("st", "a", "b", 3, "stairs")])
    graph = build_navigation_graph(layout, NavigationUserPreferences())

    assert shortest_path(graph, "a", "b", NavigationUserPreferences(avoid_stairs=True)) is None


def test_shortest_path_avoid_stairs_never_decreases_cost(make_layout) -> None:
    layout = make_layout(
        ["a", "b", "c", "d"],
        [
            ("st", "a", "d", 2, "stairs"),
            ("w1", "a", "b", 10, "walkway"),
            ("w2", "b", "c", 10, "walkway"),
            ("w3", "c", "d", 10, "walkway"),
            ("lift", "b", "d", 0, "elevator"),
        ],
    )
    graph = build_navigation_graph(layout, NavigationUserPreferences())

    open_cost = shortest_path(graph, "a", "d", NavigationUserPreferences()).cost
    avoid_cost = shortest_path(graph, "a", "d", NavigationUserPreferences(avoid_stairs=True)).cost

    assert avoid_cost >= open_cost
