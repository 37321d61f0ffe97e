"""Tabular document repository for database operations."""

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetgrid.infrastructure.persistence.models import (
    AccountModel,
    TabularDocumentModel,
)


class DocumentRepository:
    """Repository for tabular document database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, document: TabularDocumentModel) -> TabularDocumentModel:
        """Create a new document.

        Args:
            document: Document model to create.

        Returns:
            Created document model with server defaults loaded.
        """
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def get_by_id(self, document_id: str) -> TabularDocumentModel | None:
        """Get a document by ID.

        Args:
            document_id: Document ID (UUID string).

        Returns:
            Document model if found, None otherwise.
        """
        result = await self.session.execute(
            select(TabularDocumentModel).where(TabularDocumentModel.id == document_id)
        )
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: str) -> list[TabularDocumentModel]:
        """List documents owned by an account, most recently updated first."""
        result = await self.session.execute(
            select(TabularDocumentModel)
            .where(TabularDocumentModel.owner_id == owner_id)
            .order_by(TabularDocumentModel.updated_at.desc())
        )
        return list(result.scalars().all())

    async def list_with_owners(
        self,
    ) -> list[tuple[TabularDocumentModel, AccountModel | None]]:
        """List every document paired with its owner account.

        Documents whose owner no longer exists are paired with None.
        """
        result = await self.session.execute(
            select(TabularDocumentModel, AccountModel)
            .outerjoin(AccountModel, AccountModel.id == TabularDocumentModel.owner_id)
            .order_by(TabularDocumentModel.updated_at.desc())
        )
        return [(document, owner) for document, owner in result.all()]

    async def count_by_owner(self) -> dict[str, int]:
        """Count documents per owner ID."""
        result = await self.session.execute(
            select(
                TabularDocumentModel.owner_id, func.count(TabularDocumentModel.id)
            ).group_by(TabularDocumentModel.owner_id)
        )
        return {owner_id: count for owner_id, count in result.all()}

    async def list_structure(self) -> list[tuple[str, list[dict[str, Any]]]]:
        """Return ``(owner_id, rows)`` for every document."""
        result = await self.session.execute(
            select(TabularDocumentModel.owner_id, TabularDocumentModel.rows)
        )
        return [(owner_id, rows or []) for owner_id, rows in result.all()]

    async def delete_by_id(self, document_id: str) -> bool:
        """Delete a document.

        Returns:
            True if a row was deleted.
        """
        result = await self.session.execute(
            delete(TabularDocumentModel).where(TabularDocumentModel.id == document_id)
        )
        return result.rowcount > 0
