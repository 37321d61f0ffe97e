"""Resolve a session token into the caller's identity."""

from sqlalchemy.ext.asyncio import AsyncSession

from fleetgrid.core.logging import get_logger
from fleetgrid.domain.entities import Identity, Role
from fleetgrid.infrastructure.auth.jwt_service import JWTError, JWTService
from fleetgrid.infrastructure.persistence.repositories import AccountRepository

logger = get_logger(__name__)


class IdentityResolver:
    """Turns an opaque session token into an ``Identity``.

    The token only proves which account signed in; the role is read from the
    account's current record so a stale token cannot carry a stale role.
    Resolution never raises: every failure yields ``None``.
    """

    def __init__(self, jwt_service: JWTService) -> None:
        self.jwt_service = jwt_service

    async def resolve(self, token: str | None, session: AsyncSession) -> Identity | None:
        """Resolve ``token`` to an identity.

        Args:
            token: Raw session token, or None when the request carried none.
            session: Database session used to load the account.

        Returns:
            The identity, or None if the token is absent, invalid, expired,
            or names an account that no longer exists.
        """
        if not token:
            return None

        try:
            payload = self.jwt_service.decode_token(token)
        except JWTError as e:
            logger.debug("Session token rejected", reason=str(e))
            return None

        account = await AccountRepository(session).get_by_id(payload["id"])
        if account is None:
            logger.debug("Session token names a missing account", account_id=payload["id"])
            return None

        role = Role.parse(account.role)
        if role is None:
            logger.warning("Account has unknown role", account_id=account.id, role=account.role)
            return None

        return Identity(id=account.id, role=role, email=account.email, name=account.name)
