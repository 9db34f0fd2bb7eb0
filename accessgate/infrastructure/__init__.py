"""Infrastructure adapters (Casbin, PyJWT, SQLAlchemy, structlog)."""
