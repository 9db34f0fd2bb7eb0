"""HTTP routers.

Modules:
    system: unversioned endpoints (health)
    api.v1.casbin: policy administration under /api/v1/casbin
"""
