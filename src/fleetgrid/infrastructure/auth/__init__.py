"""Authentication infrastructure components.

This module provides password hashing, session token signing and the
identity resolver.
"""

from fleetgrid.infrastructure.auth.identity_resolver import IdentityResolver
from fleetgrid.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
)
from fleetgrid.infrastructure.auth.password_hasher import (
    dummy_password_hash,
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "IdentityResolver",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "TokenExpiredError",
    "dummy_password_hash",
    "hash_password",
    "needs_rehash",
    "verify_password",
]
