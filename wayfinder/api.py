"""FastAPI routes exposing the wayfinding engine.

Endpoints:
- Venue browsing (`/layout`, `/pois`, `/pois/{poi_id}`)
- Preferences (`/preferences`)
- Routing (`/route`, `/dynamic-route`)
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Literal

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field, model_validator

from wayfinder.engine import NavigationEngine
from wayfinder.layout_validation import validate_layout
from wayfinder.layouts import BundledLayoutSource, LayoutNotFoundError, LayoutSource, sample_layout
from wayfinder.models import Closure, Route
from wayfinder.utils import layout_to_dict, poi_to_dict, preferences_to_dict, route_to_dict

PreferenceType = Literal["shortest", "accessible", "least_crowded"]


class PreferencesUpdate(BaseModel):
    """Partial preference update; omitted fields keep their stored value."""

    model_config = ConfigDict(extra="forbid")

    preferAccessibleRoutes: bool | None = None
    avoidStairs: bool | None = None
    avoidEscalators: bool | None = None
    preferredMode: Literal["shortest", "least_crowded"] | None = None

    def to_changes(self) -> dict[str, Any]:
        """Map set fields to engine preference names."""
        names = {
            "preferAccessibleRoutes": "prefer_accessible_routes",
            "avoidStairs": "avoid_stairs",
            "avoidEscalators": "avoid_escalators",
            "preferredMode": "preferred_mode",
        }
        changes: dict[str, Any] = {}
        for key, value in self.model_dump(exclude_unset=True).items():
            # Only preferredMode may be cleared with an explicit null.
            if value is None and key != "preferredMode":
                continue
            changes[names[key]] = value
        return changes


class RouteRequest(BaseModel):
    """Request payload for a route between two POIs."""

    originPOIId: str = Field(..., min_length=1)
    destinationPOIId: str = Field(..., min_length=1)
    preferenceType: PreferenceType | None = None


class ClosurePayload(BaseModel):
    """One closed POI or one closed path segment."""

    poiId: str | None = None
    pathSegmentId: str | None = None

    @model_validator(mode="after")
    def validate_target(self) -> "ClosurePayload":
        """Ensure exactly one closure target is supplied."""
        if (self.poiId is None) == (self.pathSegmentId is None):
            raise ValueError("Provide exactly one of poiId or pathSegmentId")
        return self

    def to_closure(self) -> Closure:
        return Closure(poi_id=self.poiId, path_segment_id=self.pathSegmentId)


class DynamicRouteRequest(RouteRequest):
    """Route request with temporary closures."""

    closures: list[ClosurePayload] = Field(default_factory=list)


def _route_or_404(engine: NavigationEngine, route: Route | None, payload: RouteRequest) -> dict[str, Any]:
    """Serialize a route, mapping engine None results to 404 responses."""
    if route is not None:
        return route_to_dict(route)

    for label, poi_id in (("Origin", payload.originPOIId), ("Destination", payload.destinationPOIId)):
        if engine.get_poi_by_id(poi_id) is None:
            raise HTTPException(status_code=404, detail=f"{label} POI '{poi_id}' not found")
    raise HTTPException(status_code=404, detail="No route found")


def create_app(
    engine: NavigationEngine | None = None,
    source: LayoutSource | None = None,
    startup_layout_id: str | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        engine: Engine serving requests. Defaults to one on the bundled sample venue.
        source: Layout source used by `/layouts/{layout_id}/load`.
        startup_layout_id: Layout loaded from `source` when the app starts.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if startup_layout_id:
            await app.state.engine.load_mall_layout(app.state.layout_source, startup_layout_id)
        yield

    app = FastAPI(title="Wayfinder API", version="1.0.0", lifespan=lifespan)

    raw_origins = os.getenv("WAYFINDER_CORS_ORIGINS", "*").strip()
    if raw_origins == "*":
        cors_origins = ["*"]
        allow_credentials = False
    else:
        cors_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
        allow_credentials = True

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.engine = engine if engine is not None else NavigationEngine(sample_layout())
    app.state.layout_source = source if source is not None else BundledLayoutSource()

    def _engine() -> NavigationEngine:
        return app.state.engine

    @app.get("/health")
    def health() -> dict[str, Any]:
        """Health endpoint with loaded venue metadata."""
        layout = _engine().get_mall_layout()
        graph = _engine().graph
        return {
            "status": "ok",
            "version": app.version,
            "layout_id": layout.id if layout else None,
            "node_count": len(graph.nodes) if graph else 0,
            "edge_count": graph.edge_count if graph else 0,
        }

    @app.get("/layout")
    async def get_layout() -> dict[str, Any]:
        """Return the loaded venue layout."""
        layout = _engine().get_mall_layout()
        if layout is None:
            raise HTTPException(status_code=404, detail="No mall layout loaded")
        return layout_to_dict(layout)

    @app.get("/layout/validation")
    async def get_layout_validation() -> dict[str, Any]:
        """Return the quality report for the loaded layout."""
        layout = _engine().get_mall_layout()
        if layout is None:
            raise HTTPException(status_code=404, detail="No mall layout loaded")
        return validate_layout(layout)

    @app.post("/layouts/{layout_id}/load")
    async def load_layout(layout_id: str) -> dict[str, Any]:
        """Load a layout from the configured source and rebuild the graph."""
        try:
            layout = await _engine().load_mall_layout(app.state.layout_source, layout_id)
        except LayoutNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Layout loading failed: {exc}") from exc

        return {
            "message": "Layout loaded successfully",
            "layout_id": layout.id,
            "floor_count": len(layout.floors),
            "poi_count": sum(len(floor.pois) for floor in layout.floors),
        }

    @app.get("/pois")
    async def get_pois(floor_level: int | None = Query(default=None)) -> dict[str, Any]:
        """Return POIs for one floor or the whole venue."""
        pois = _engine().get_all_pois(floor_level)
        return {"pois": [poi_to_dict(poi) for poi in pois]}

    @app.get("/pois/{poi_id}")
    async def get_poi(poi_id: str) -> dict[str, Any]:
        poi = _engine().get_poi_by_id(poi_id)
        if poi is None:
            raise HTTPException(status_code=404, detail=f"POI '{poi_id}' not found")
        return poi_to_dict(poi)

    @app.get("/preferences")
    async def get_preferences() -> dict[str, Any]:
        return preferences_to_dict(_engine().get_user_preferences())

    @app.patch("/preferences")
    async def update_preferences(payload: PreferencesUpdate) -> dict[str, Any]:
        """Apply a partial preference update."""
        try:
            _engine().update_user_preferences(**payload.to_changes())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid preferences: {exc}") from exc
        return preferences_to_dict(_engine().get_user_preferences())

    @app.post("/route")
    async def find_route(payload: RouteRequest) -> dict[str, Any]:
        """Compute the lowest-cost route between two POIs."""
        engine = _engine()
        if engine.get_mall_layout() is None:
            raise HTTPException(status_code=400, detail="No mall layout loaded")

        try:
            route = engine.find_route(payload.originPOIId, payload.destinationPOIId, payload.preferenceType)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid route query: {exc}") from exc

        return _route_or_404(engine, route, payload)

    @app.post("/dynamic-route")
    async def dynamic_route(payload: DynamicRouteRequest) -> dict[str, Any]:
        """Compute a route around temporarily closed POIs or segments."""
        engine = _engine()
        if engine.get_mall_layout() is None:
            raise HTTPException(status_code=400, detail="No mall layout loaded")

        try:
            route = engine.get_dynamic_route(
                payload.originPOIId,
                payload.destinationPOIId,
                [closure.to_closure() for closure in payload.closures],
                payload.preferenceType,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid route query: {exc}") from exc

        return _route_or_404(engine, route, payload)

    return app
