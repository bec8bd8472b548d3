"""API routers grouped by audience."""
