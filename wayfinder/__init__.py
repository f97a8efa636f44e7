"""Indoor wayfinding engine: preference-aware routing across venue floors."""
