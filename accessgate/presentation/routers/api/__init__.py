"""Versioned API routers and their middleware dependencies."""
