"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field

from fleetgrid.infrastructure.api.schemas.account_schemas import AccountResponse


class SignupRequest(BaseModel):
    """Request body for self-service registration."""

    name: str | None = Field(None, description="Display name")
    email: EmailStr | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Password")


class LoginRequest(BaseModel):
    """Request body for login."""

    email: str | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Password")


class AuthResponse(BaseModel):
    """Response for successful signup or login. The session travels in a cookie."""

    message: str = Field(..., description="Human-readable result")
    role: str = Field(..., description="Role of the signed-in account")
    user: AccountResponse = Field(..., description="The signed-in account")


class CurrentAccountResponse(BaseModel):
    user: AccountResponse = Field(..., description="The caller's account")


class MessageResponse(BaseModel):
    message: str = Field(..., description="Human-readable result")


class ErrorResponse(BaseModel):
    """Body returned for every domain error."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")


class ValidationErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str = Field(..., description="Field name that failed validation")
    message: str = Field(..., description="Human-readable error message")
    code: str | None = Field(None, description="Machine-readable error code")


class ValidationErrorResponse(BaseModel):
    """Response for request-body validation errors."""

    error: str = Field(..., description="Error type")
    details: list[ValidationErrorDetail] = Field(..., description="List of validation errors")
