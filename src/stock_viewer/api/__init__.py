"""FastAPI REST surface: app factory, routes, and schemas."""
