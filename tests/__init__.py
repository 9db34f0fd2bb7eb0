"""Test suite for accessgate.

Test structure follows the test pyramid:
- unit/: Unit tests - domain values and the policy engine in isolation
- integration/: Integration tests - real policy files, SQLite, JWT
- api/: API endpoint tests - HTTP through the FastAPI app

Every test gets its own policy file (and database) under tmp_path.
"""
