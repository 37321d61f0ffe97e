"""Domain entities for FleetGrid.

Entities are plain Python classes that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from fleetgrid.domain.entities.account import Identity, Role, normalize_email
from fleetgrid.domain.entities.tabular_document import (
    Row,
    TabularDocument,
    clean_headers,
    clean_name,
    clean_rows,
    name_from_filename,
    stringify_cell,
)

__all__ = [
    "Identity",
    "Role",
    "Row",
    "TabularDocument",
    "clean_headers",
    "clean_name",
    "clean_rows",
    "name_from_filename",
    "normalize_email",
    "stringify_cell",
]
