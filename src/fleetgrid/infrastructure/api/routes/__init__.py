"""API Routes for FleetGrid."""

from fleetgrid.infrastructure.api.routes.auth_router import router as auth_router
from fleetgrid.infrastructure.api.routes.directory_router import router as directory_router
from fleetgrid.infrastructure.api.routes.documents_router import router as documents_router
from fleetgrid.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "auth_router",
    "directory_router",
    "documents_router",
    "users_router",
]
