"""SQLAlchemy model for the tabular_documents table.

Headers and rows are stored as JSON. Rows are free-form mappings because
headers can be renamed at runtime.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from fleetgrid.infrastructure.persistence.database import Base


class TabularDocumentModel(Base):
    """SQLAlchemy model for the tabular_documents table.

    Attributes:
        id: Primary key (UUID string).
        owner_id: Account that exclusively owns the document.
        name: Display name.
        headers: Ordered header labels (JSON list).
        rows: Row records (JSON list of objects).
        version: Incremented on every persisted change.
        created_at: Timestamp when the document was created.
        updated_at: Timestamp when the document was last changed.
    """

    __tablename__ = "tabular_documents"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Document ID (UUID)",
    )
    # Owner accounts are never cascaded; a missing owner is tolerated by listings.
    owner_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
        comment="Owning account ID",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    headers: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )
    rows: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )
    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    @property
    def row_count(self) -> int:
        return len(self.rows or [])

    def __repr__(self) -> str:
        return f"<TabularDocument(id={self.id}, name={self.name}, owner_id={self.owner_id})>"
