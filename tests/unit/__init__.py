"""Unit tests: pure domain logic and adapters with mocked dependencies."""
