"""Pydantic schemas for account endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class AccountCreateRequest(BaseModel):
    """Request body for admin-driven account creation.

    Fields are optional at the schema level so that a missing field yields
    the domain's "All fields are required" message.
    """

    name: str | None = Field(None, description="Display name")
    email: EmailStr | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Initial password")
    role: str | None = Field(None, description="ADMIN or MANAGER")


class AccountResponse(BaseModel):
    """Public account information."""

    id: str = Field(..., description="Account ID (UUID)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    role: str = Field(..., description="ADMIN or MANAGER")
    created_at: datetime = Field(..., description="When the account was created")

    model_config = {"from_attributes": True}


class AccountCreatedResponse(BaseModel):
    message: str = Field(..., description="Human-readable result")
    user: AccountResponse = Field(..., description="The created account")


class AccountListResponse(BaseModel):
    users: list[AccountResponse] = Field(..., description="Accounts, newest first")
