"""Authentication API routes.

Provides signup, login, logout and the current-identity endpoint. The
session token is delivered as an HTTP-only cookie.
"""

from fastapi import APIRouter, Depends, Response, status

from fleetgrid.core.config import Settings
from fleetgrid.core.logging import get_logger
from fleetgrid.domain.services import AccountService
from fleetgrid.infrastructure.api.dependencies import (
    AppSettings,
    AuthenticatedIdentity,
    DbSession,
    get_jwt_service,
)
from fleetgrid.infrastructure.api.schemas import (
    AccountResponse,
    AuthResponse,
    CurrentAccountResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
)
from fleetgrid.infrastructure.api.session_cookie import (
    clear_session_cookie,
    set_session_cookie,
)
from fleetgrid.infrastructure.auth import JWTService
from fleetgrid.infrastructure.persistence.models import AccountModel
from fleetgrid.infrastructure.persistence.repositories import AccountRepository

logger = get_logger(__name__)

router = APIRouter()


def _start_session(
    response: Response,
    account: AccountModel,
    jwt_service: JWTService,
    settings: Settings,
) -> None:
    token = jwt_service.create_session_token(account.id, account.role)
    set_session_cookie(response, token, settings, max_age=jwt_service.get_expires_in())


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing fields"},
        409: {"description": "Email already registered"},
    },
)
async def signup(
    request: SignupRequest,
    response: Response,
    session: DbSession,
    settings: AppSettings,
    jwt_service: JWTService = Depends(get_jwt_service),
) -> AuthResponse:
    """Register a new MANAGER account and sign it in."""
    account = await AccountService(session).signup(
        request.name, request.email, request.password
    )
    _start_session(response, account, jwt_service, settings)

    return AuthResponse(
        message="Manager account created",
        role=account.role,
        user=AccountResponse.model_validate(account),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing fields"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    response: Response,
    session: DbSession,
    settings: AppSettings,
    jwt_service: JWTService = Depends(get_jwt_service),
) -> AuthResponse:
    """Check credentials and issue a fresh session cookie."""
    account = await AccountService(session).authenticate(request.email, request.password)
    _start_session(response, account, jwt_service, settings)

    return AuthResponse(
        message="Login successful",
        role=account.role,
        user=AccountResponse.model_validate(account),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, settings: AppSettings) -> MessageResponse:
    """Clear the session cookie. Works with or without a session."""
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out")


@router.get(
    "/me",
    response_model=CurrentAccountResponse,
    responses={401: {"description": "Not signed in"}},
)
async def me(identity: AuthenticatedIdentity, session: DbSession) -> CurrentAccountResponse:
    """Return the caller's account."""
    account = await AccountRepository(session).get_by_id(identity.id)
    return CurrentAccountResponse(user=AccountResponse.model_validate(account))
