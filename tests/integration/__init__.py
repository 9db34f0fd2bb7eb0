"""Integration tests: real files, SQLite databases, Casbin and PyJWT."""
