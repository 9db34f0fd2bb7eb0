"""Presentation layer: FastAPI routers, dependencies and error handling."""
