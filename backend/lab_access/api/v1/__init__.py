# API v1 routers
from lab_access.api.v1 import auth, profiles, requests

__all__ = ["auth", "profiles", "requests"]
