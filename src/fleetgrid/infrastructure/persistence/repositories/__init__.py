"""Repository classes wrapping SQLAlchemy queries."""

from fleetgrid.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from fleetgrid.infrastructure.persistence.repositories.document_repository import (
    DocumentRepository,
)

__all__ = [
    "AccountRepository",
    "DocumentRepository",
]
