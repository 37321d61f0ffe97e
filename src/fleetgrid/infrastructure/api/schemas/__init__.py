"""API Schemas for request/response validation."""

from fleetgrid.infrastructure.api.schemas.account_schemas import (
    AccountCreatedResponse,
    AccountCreateRequest,
    AccountListResponse,
    AccountResponse,
)
from fleetgrid.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    CurrentAccountResponse,
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from fleetgrid.infrastructure.api.schemas.directory_schemas import (
    AccountDirectoryEntry,
    DirectoryAccountsResponse,
    DirectorySummaryResponse,
)
from fleetgrid.infrastructure.api.schemas.document_schemas import (
    CreateDocumentRequest,
    DocumentCreatedResponse,
    DocumentDetailResponse,
    DocumentListResponse,
    DocumentMutationResponse,
    DocumentResponse,
    DocumentSummaryResponse,
    EditCellRequest,
    OwnedDocumentListResponse,
    OwnedDocumentResponse,
    RenameHeaderRequest,
    UpdateDocumentRequest,
)

__all__ = [
    "AccountCreatedResponse",
    "AccountCreateRequest",
    "AccountDirectoryEntry",
    "AccountListResponse",
    "AccountResponse",
    "AuthResponse",
    "CreateDocumentRequest",
    "CurrentAccountResponse",
    "DirectoryAccountsResponse",
    "DirectorySummaryResponse",
    "DocumentCreatedResponse",
    "DocumentDetailResponse",
    "DocumentListResponse",
    "DocumentMutationResponse",
    "DocumentResponse",
    "DocumentSummaryResponse",
    "EditCellRequest",
    "ErrorResponse",
    "LoginRequest",
    "MessageResponse",
    "OwnedDocumentListResponse",
    "OwnedDocumentResponse",
    "RenameHeaderRequest",
    "SignupRequest",
    "UpdateDocumentRequest",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
]
