"""Application entry point for the Wayfinder API.

Run locally:
    uvicorn wayfinder.main:app --reload --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import os
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from wayfinder.api import create_app
from wayfinder.engine import NavigationEngine
from wayfinder.layouts import BundledLayoutSource, JsonDirectoryLayoutSource, LayoutSource
from wayfinder.sample_data import SAMPLE_LAYOUT_ID


def _load_local_env() -> None:
    """Load key=value pairs from a local .env file if present.

    Variables already set in the environment win.
    """
    env_path = Path(".env")
    if not env_path.exists():
        return

    for raw in env_path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if not key or key in os.environ:
            continue
        os.environ[key] = value.strip().strip("'").strip('"')


def _layout_source() -> LayoutSource:
    layout_dir = os.getenv("WAYFINDER_LAYOUT_DIR", "").strip()
    if layout_dir:
        return JsonDirectoryLayoutSource(layout_dir)
    return BundledLayoutSource()


def build_app() -> FastAPI:
    """Create the app; the default layout is loaded from the configured source at startup."""
    layout_id = os.getenv("WAYFINDER_DEFAULT_LAYOUT", SAMPLE_LAYOUT_ID).strip() or SAMPLE_LAYOUT_ID
    return create_app(engine=NavigationEngine(), source=_layout_source(), startup_layout_id=layout_id)


_load_local_env()
app = build_app()


if __name__ == "__main__":
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    reload_enabled = os.getenv("API_RELOAD", "true").lower() == "true"
    uvicorn.run("wayfinder.main:app", host=host, port=port, reload=reload_enabled)
