"""API v1 routers.

Resources:
    /api/v1/casbin/*   - Role and policy administration

Every v1 route is behind bearer authentication and the path/method policy
check (``authorize_request``). Routers are mounted by
``accessgate.main.create_app`` with the ``/api/v1`` prefix.
"""

API_V1_PREFIX = "/api/v1"
