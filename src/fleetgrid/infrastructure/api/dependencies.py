"""FastAPI dependencies for authentication and authorization.

The session token is read from the session cookie first, then from an
``Authorization: Bearer`` header. Role checks are delegated to the access
gate, whose errors are rendered by the application's exception handlers.
"""

from typing import Annotated, Awaitable, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fleetgrid.core.config import Settings
from fleetgrid.core.logging import get_logger
from fleetgrid.domain.entities import Identity
from fleetgrid.domain.services import AccessGate, Capability
from fleetgrid.infrastructure.auth import IdentityResolver, JWTService
from fleetgrid.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


def get_jwt_service(request: Request) -> JWTService:
    return request.app.state.jwt_service


def get_identity_resolver(request: Request) -> IdentityResolver:
    return request.app.state.identity_resolver


def extract_session_token(request: Request) -> str | None:
    """Return the raw session token carried by the request, if any."""
    settings = get_app_settings(request)
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token

    authorization = request.headers.get("Authorization")
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


async def get_optional_identity(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> Identity | None:
    """Resolve the caller, or None for anonymous requests."""
    resolver = get_identity_resolver(request)
    return await resolver.resolve(extract_session_token(request), session)


def require_capability(capability: Capability) -> Callable[..., Awaitable[Identity]]:
    """Build a dependency that admits only identities holding ``capability``.

    Raises (from the dependency):
        UnauthorizedError: If the request is anonymous.
        ForbiddenRoleError: If the caller's role does not match.
    """

    async def dependency(
        request: Request,
        identity: Annotated[Identity | None, Depends(get_optional_identity)],
    ) -> Identity:
        decision = AccessGate.evaluate(identity, capability)
        if not decision.allowed:
            logger.info(
                "Access denied",
                path=request.url.path,
                capability=capability.value,
                account_id=identity.id if identity else None,
            )
            decision.raise_if_denied()
        return identity

    return dependency


OptionalIdentity = Annotated[Identity | None, Depends(get_optional_identity)]
AuthenticatedIdentity = Annotated[
    Identity, Depends(require_capability(Capability.AUTHENTICATED))
]
ManagerIdentity = Annotated[Identity, Depends(require_capability(Capability.MANAGER_ONLY))]
AdminIdentity = Annotated[Identity, Depends(require_capability(Capability.ADMIN_ONLY))]
StaffIdentity = Annotated[
    Identity, Depends(require_capability(Capability.ADMIN_OR_MANAGER))
]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
