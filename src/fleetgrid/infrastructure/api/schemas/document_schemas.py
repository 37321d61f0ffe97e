"""Pydantic schemas for tabular document endpoints.

Update payloads accept loosely typed values so that shape errors surface
with the domain's own messages ("Headers must be an array", ...).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from fleetgrid.infrastructure.api.schemas.account_schemas import AccountResponse


class CreateDocumentRequest(BaseModel):
    """Request body for creating an empty document."""

    template: str | None = Field(
        None, description="Template key: vehicle, driver, expense or blank"
    )
    name: str | None = Field(None, description="Name override")
    headers: Any = Field(None, description="Explicit header list, used without a template")


class UpdateDocumentRequest(BaseModel):
    """Partial replacement of a document. Omitted fields are left untouched."""

    name: Any = Field(None, description="New display name")
    headers: Any = Field(None, description="Replacement header list")
    rows: Any = Field(None, description="Replacement row list")
    version: int | None = Field(
        None, description="Expected current version; mismatches are rejected"
    )


class EditCellRequest(BaseModel):
    row_index: int = Field(..., description="Zero-based row position")
    header: str = Field(..., description="Column header label")
    value: Any = Field(None, description="New cell value, stored as text")


class RenameHeaderRequest(BaseModel):
    old: str = Field(..., description="Current header label")
    new: str = Field(..., description="New header label")


class DocumentSummaryResponse(BaseModel):
    """Document metadata without row data."""

    id: str = Field(..., description="Document ID (UUID)")
    name: str = Field(..., description="Display name")
    headers: list[str] = Field(..., description="Ordered header labels")
    row_count: int = Field(..., description="Number of rows")
    owner_id: str = Field(..., description="Owning account ID")
    version: int = Field(..., description="Incremented on every change")
    created_at: datetime = Field(..., description="When the document was created")
    updated_at: datetime = Field(..., description="When the document last changed")

    model_config = {"from_attributes": True}


class DocumentResponse(DocumentSummaryResponse):
    """Full document including rows."""

    rows: list[dict[str, Any]] = Field(..., description="Row records keyed by header")


class OwnedDocumentResponse(DocumentSummaryResponse):
    owner: AccountResponse | None = Field(
        None, description="Owning account, or null when it no longer exists"
    )


class DocumentCreatedResponse(BaseModel):
    message: str = Field(..., description="Human-readable result")
    file: DocumentSummaryResponse = Field(..., description="The new document, without rows")


class DocumentMutationResponse(BaseModel):
    message: str = Field(..., description="Human-readable result")
    file: DocumentResponse = Field(..., description="The document after the change")


class DocumentDetailResponse(BaseModel):
    file: DocumentResponse = Field(..., description="The requested document")


class DocumentListResponse(BaseModel):
    files: list[DocumentSummaryResponse] = Field(..., description="Documents, newest first")


class OwnedDocumentListResponse(BaseModel):
    files: list[OwnedDocumentResponse] = Field(..., description="Documents with owners")
