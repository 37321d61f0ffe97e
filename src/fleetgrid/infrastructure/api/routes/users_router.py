"""Account administration routes. ADMIN only."""

from fastapi import APIRouter, status

from fleetgrid.core.logging import get_logger
from fleetgrid.domain.services import AccountService
from fleetgrid.infrastructure.api.dependencies import AdminIdentity, DbSession
from fleetgrid.infrastructure.api.schemas import (
    AccountCreatedResponse,
    AccountCreateRequest,
    AccountListResponse,
    AccountResponse,
)

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=AccountListResponse)
async def list_accounts(admin: AdminIdentity, session: DbSession) -> AccountListResponse:
    """List all accounts, newest first."""
    accounts = await AccountService(session).list_accounts()
    return AccountListResponse(
        users=[AccountResponse.model_validate(account) for account in accounts]
    )


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    response_model=AccountCreatedResponse,
    responses={
        400: {"description": "Missing fields or invalid role"},
        409: {"description": "Email already registered"},
    },
)
async def create_account(
    request: AccountCreateRequest,
    admin: AdminIdentity,
    session: DbSession,
) -> AccountCreatedResponse:
    """Create an ADMIN or MANAGER account."""
    account = await AccountService(session).create_account(
        request.name, request.email, request.password, request.role
    )
    logger.info("Account created by admin", account_id=account.id, admin_id=admin.id)

    return AccountCreatedResponse(
        message=f"{account.role} created",
        user=AccountResponse.model_validate(account),
    )
