"""Account repository for database operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetgrid.infrastructure.persistence.models import AccountModel


class AccountRepository:
    """Repository for account database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, account: AccountModel) -> AccountModel:
        """Create a new account.

        Args:
            account: Account model to create.

        Returns:
            Created account model.
        """
        self.session.add(account)
        await self.session.flush()
        return account

    async def get_by_id(self, account_id: str) -> AccountModel | None:
        """Get an account by ID.

        Args:
            account_id: Account ID (UUID string).

        Returns:
            Account model if found, None otherwise.
        """
        result = await self.session.execute(
            select(AccountModel).where(AccountModel.id == account_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> AccountModel | None:
        """Get an account by its normalized email."""
        result = await self.session.execute(
            select(AccountModel).where(AccountModel.email == email)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        result = await self.session.execute(
            select(AccountModel.id).where(AccountModel.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[AccountModel]:
        """List every account, newest first."""
        result = await self.session.execute(
            select(AccountModel).order_by(AccountModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_ids(self, account_ids: list[str]) -> dict[str, AccountModel]:
        """Get accounts keyed by ID. Unknown IDs are simply absent."""
        if not account_ids:
            return {}
        result = await self.session.execute(
            select(AccountModel).where(AccountModel.id.in_(account_ids))
        )
        return {account.id: account for account in result.scalars().all()}

    async def count_by_role(self) -> dict[str, int]:
        """Count accounts per role.

        Returns:
            Mapping of role value to number of accounts.
        """
        result = await self.session.execute(
            select(AccountModel.role, func.count(AccountModel.id)).group_by(
                AccountModel.role
            )
        )
        return {role: count for role, count in result.all()}
