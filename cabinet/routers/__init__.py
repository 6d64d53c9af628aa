"""
FastAPI routers for the Medicine Cabinet API.
"""

from cabinet.routers.auth import router as auth_router
from cabinet.routers.users import router as users_router
from cabinet.routers.strains import router as strains_router

__all__ = ["auth_router", "users_router", "strains_router"]
