"""accessgate: bearer-token authentication and Casbin RBAC authorization."""

__version__ = "0.1.0"
