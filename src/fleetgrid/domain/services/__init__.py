"""Domain services for FleetGrid.

Services hold the business rules that span more than one entity or need a
database session.
"""

from fleetgrid.domain.services.access_gate import (
    AccessDecision,
    AccessGate,
    Capability,
)
from fleetgrid.domain.services.account_service import AccountService
from fleetgrid.domain.services.directory_service import (
    AccountDocumentCount,
    DirectoryService,
    DirectorySummary,
    DocumentListing,
)
from fleetgrid.domain.services.document_service import (
    DocumentService,
    parse_document_id,
)
from fleetgrid.domain.services.document_templates import (
    TEMPLATES,
    DocumentTemplate,
    get_template,
)

__all__ = [
    "AccessDecision",
    "AccessGate",
    "AccountDocumentCount",
    "AccountService",
    "Capability",
    "DirectoryService",
    "DirectorySummary",
    "DocumentListing",
    "DocumentService",
    "DocumentTemplate",
    "TEMPLATES",
    "get_template",
    "parse_document_id",
]
