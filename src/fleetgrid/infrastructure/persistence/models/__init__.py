"""SQLAlchemy models for FleetGrid.

All models inherit from the Base class defined in database.py and are
created on application startup.
"""

from fleetgrid.infrastructure.persistence.models.account import AccountModel
from fleetgrid.infrastructure.persistence.models.tabular_document import (
    TabularDocumentModel,
)

__all__ = [
    "AccountModel",
    "TabularDocumentModel",
]
