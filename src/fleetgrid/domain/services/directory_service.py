"""Read-only reporting across accounts and their documents."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from fleetgrid.domain.entities import Role
from fleetgrid.infrastructure.persistence.models import (
    AccountModel,
    TabularDocumentModel,
)
from fleetgrid.infrastructure.persistence.repositories import (
    AccountRepository,
    DocumentRepository,
)


@dataclass(frozen=True)
class DocumentListing:
    """A document paired with its owner, or None when the owner is gone."""

    document: TabularDocumentModel
    owner: AccountModel | None


@dataclass(frozen=True)
class AccountDocumentCount:
    account: AccountModel
    document_count: int


@dataclass(frozen=True)
class DirectorySummary:
    """Fleet-wide totals."""

    total_accounts: int
    total_admins: int
    total_managers: int
    total_documents: int
    total_rows: int
    orphaned_documents: int


class DirectoryService:
    """Service composing account and document listings."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the directory service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.account_repo = AccountRepository(session)
        self.document_repo = DocumentRepository(session)

    async def list_documents_with_owners(self) -> list[DocumentListing]:
        """Every document, most recently updated first, with its owner."""
        pairs = await self.document_repo.list_with_owners()
        return [DocumentListing(document=doc, owner=owner) for doc, owner in pairs]

    async def account_document_counts(self) -> list[AccountDocumentCount]:
        """Every account (newest first) with the number of documents it owns."""
        accounts = await self.account_repo.list_all()
        counts = await self.document_repo.count_by_owner()
        return [
            AccountDocumentCount(account=account, document_count=counts.get(account.id, 0))
            for account in accounts
        ]

    async def summary(self) -> DirectorySummary:
        """Compute fleet-wide totals.

        Returns:
            DirectorySummary with account, document, row and orphan counts.
        """
        role_counts = await self.account_repo.count_by_role()
        structure = await self.document_repo.list_structure()

        owner_ids = list({owner_id for owner_id, _ in structure})
        existing = await self.account_repo.get_by_ids(owner_ids)
        orphaned = sum(1 for owner_id, _ in structure if owner_id not in existing)

        return DirectorySummary(
            total_accounts=sum(role_counts.values()),
            total_admins=role_counts.get(Role.ADMIN.value, 0),
            total_managers=role_counts.get(Role.MANAGER.value, 0),
            total_documents=len(structure),
            total_rows=sum(len(rows) for _, rows in structure),
            orphaned_documents=orphaned,
        )
