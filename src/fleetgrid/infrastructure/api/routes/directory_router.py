"""Directory and reporting routes. ADMIN only."""

from fastapi import APIRouter

from fleetgrid.domain.services import DirectoryService
from fleetgrid.infrastructure.api.dependencies import AdminIdentity, DbSession
from fleetgrid.infrastructure.api.schemas import (
    AccountDirectoryEntry,
    AccountResponse,
    DirectoryAccountsResponse,
    DirectorySummaryResponse,
)

router = APIRouter()


@router.get("/accounts", response_model=DirectoryAccountsResponse)
async def list_accounts_with_counts(
    admin: AdminIdentity, session: DbSession
) -> DirectoryAccountsResponse:
    """Every account with the number of documents it owns."""
    entries = await DirectoryService(session).account_document_counts()
    return DirectoryAccountsResponse(
        accounts=[
            AccountDirectoryEntry(
                **AccountResponse.model_validate(entry.account).model_dump(),
                document_count=entry.document_count,
            )
            for entry in entries
        ]
    )


@router.get("/summary", response_model=DirectorySummaryResponse)
async def get_summary(admin: AdminIdentity, session: DbSession) -> DirectorySummaryResponse:
    """Fleet-wide totals."""
    summary = await DirectoryService(session).summary()
    return DirectorySummaryResponse.model_validate(summary)
