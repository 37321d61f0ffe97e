"""Account service for business logic.

Provides signup, admin-driven account creation, credential checks and
listing. Emails are normalized before every lookup and write.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fleetgrid.core.logging import get_logger
from fleetgrid.domain.entities import Identity, Role, normalize_email
from fleetgrid.domain.exceptions import (
    ConflictError,
    UnauthorizedError,
    ValidationError,
)
from fleetgrid.infrastructure.auth import (
    dummy_password_hash,
    hash_password,
    needs_rehash,
    verify_password,
)
from fleetgrid.infrastructure.persistence.models import AccountModel
from fleetgrid.infrastructure.persistence.repositories import AccountRepository

logger = get_logger(__name__)

EMAIL_TAKEN = "Email already registered"


class AccountService:
    """Service for account management business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the account service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.account_repo = AccountRepository(session)

    async def create_account(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        role: str | Role | None,
    ) -> AccountModel:
        """Create an account with an explicit role.

        Args:
            name: Display name.
            email: Email address; stored trimmed and lower-cased.
            password: Plaintext password, hashed before storage.
            role: ``ADMIN`` or ``MANAGER``.

        Returns:
            Created account model.

        Raises:
            ValidationError: If a field is missing or the role is unknown.
            ConflictError: If the email is already registered.
        """
        name = name.strip() if isinstance(name, str) else ""
        email = normalize_email(email) if isinstance(email, str) else ""
        if not name or not email or not password or not role:
            raise ValidationError("All fields are required")

        parsed_role = Role.parse(role.value if isinstance(role, Role) else role)
        if parsed_role is None:
            raise ValidationError("Role must be ADMIN or MANAGER")

        if await self.account_repo.email_exists(email):
            raise ConflictError(EMAIL_TAKEN)

        now = datetime.now(timezone.utc)
        account = AccountModel(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=parsed_role.value,
            created_at=now,
            updated_at=now,
        )

        try:
            await self.account_repo.create(account)
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race against a concurrent signup with the same email
            await self.session.rollback()
            raise ConflictError(EMAIL_TAKEN) from e

        logger.info("Account created", account_id=account.id, role=account.role)
        return account

    async def signup(
        self, name: str | None, email: str | None, password: str | None
    ) -> AccountModel:
        """Self-service registration. Always creates a MANAGER."""
        return await self.create_account(name, email, password, Role.MANAGER)

    async def authenticate(self, email: str | None, password: str | None) -> AccountModel:
        """Check credentials and return the matching account.

        Raises:
            ValidationError: If email or password is missing.
            UnauthorizedError: If the credentials do not match an account.
        """
        if not email or not password:
            raise ValidationError("Email and password required")

        account = await self.account_repo.get_by_email(normalize_email(email))
        if account is None:
            verify_password(password, dummy_password_hash())
            logger.info("Login failed: unknown email")
            raise UnauthorizedError("Invalid credentials")

        if not verify_password(password, account.password_hash):
            logger.info("Login failed: wrong password", account_id=account.id)
            raise UnauthorizedError("Invalid credentials")

        if needs_rehash(account.password_hash):
            account.password_hash = hash_password(password)
            await self.session.commit()
            logger.info("Password hash upgraded", account_id=account.id)

        logger.info("Login succeeded", account_id=account.id)
        return account

    async def list_accounts(self) -> list[AccountModel]:
        """All accounts, newest first."""
        return await self.account_repo.list_all()

    @staticmethod
    def to_identity(account: AccountModel) -> Identity:
        return Identity(
            id=account.id,
            role=Role(account.role),
            email=account.email,
            name=account.name,
        )
