"""Domain layer: principals, policy state, errors and ports."""
