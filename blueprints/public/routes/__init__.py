"""Public route modules. Each exposes register_routes(bp)."""
