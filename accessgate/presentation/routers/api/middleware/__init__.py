"""Request-time authentication and authorization dependencies."""
