"""Pydantic schemas for directory and reporting endpoints."""

from pydantic import BaseModel, Field

from fleetgrid.infrastructure.api.schemas.account_schemas import AccountResponse


class AccountDirectoryEntry(AccountResponse):
    document_count: int = Field(..., description="Number of documents owned")


class DirectoryAccountsResponse(BaseModel):
    accounts: list[AccountDirectoryEntry] = Field(..., description="Accounts, newest first")


class DirectorySummaryResponse(BaseModel):
    """Fleet-wide totals."""

    total_accounts: int = Field(..., description="All accounts")
    total_admins: int = Field(..., description="Accounts with the ADMIN role")
    total_managers: int = Field(..., description="Accounts with the MANAGER role")
    total_documents: int = Field(..., description="All documents")
    total_rows: int = Field(..., description="Rows across all documents")
    orphaned_documents: int = Field(..., description="Documents whose owner no longer exists")

    model_config = {"from_attributes": True}
