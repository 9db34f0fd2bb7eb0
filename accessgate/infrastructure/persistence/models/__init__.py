"""Database models for the persistence layer.

Models:
    - casbin_rule.py: Role and policy tuples
"""

from accessgate.infrastructure.persistence.models.casbin_rule import CasbinRule

__all__ = ["CasbinRule"]
