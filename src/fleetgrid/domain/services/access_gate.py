"""Access control decisions.

The gate answers one question: may this identity perform this operation?
It never touches storage and never raises on its own; ``evaluate`` returns a
decision carrying the error the caller should raise, and ``require`` is the
shortcut that raises it.

Ownership rules are asymmetric on purpose. Reading and updating a document
allow an ADMIN to act on any document, while deleting and duplicating are
reserved to the literal owner. Ownership mismatches surface as "not found"
so callers cannot discover other accounts' documents.
"""

from dataclasses import dataclass
from enum import Enum

from fleetgrid.domain.entities.account import Identity, Role
from fleetgrid.domain.exceptions import (
    FleetGridError,
    ForbiddenRoleError,
    NotFoundError,
    UnauthorizedError,
)

DOCUMENT_NOT_FOUND = "File not found"


class Capability(str, Enum):
    """Role-level capabilities an operation can require."""

    AUTHENTICATED = "authenticated"
    MANAGER_ONLY = "manager_only"
    ADMIN_ONLY = "admin_only"
    ADMIN_OR_MANAGER = "admin_or_manager"


_ALLOWED_ROLES: dict[Capability, frozenset[Role]] = {
    Capability.AUTHENTICATED: frozenset(Role),
    Capability.MANAGER_ONLY: frozenset({Role.MANAGER}),
    Capability.ADMIN_ONLY: frozenset({Role.ADMIN}),
    Capability.ADMIN_OR_MANAGER: frozenset({Role.ADMIN, Role.MANAGER}),
}

_DENIED_MESSAGES: dict[Capability, str] = {
    Capability.MANAGER_ONLY: "Manager access required",
    Capability.ADMIN_ONLY: "Admin access required",
    Capability.ADMIN_OR_MANAGER: "Admin or Manager access required",
}


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an access check."""

    allowed: bool
    error: FleetGridError | None = None

    def raise_if_denied(self) -> None:
        if not self.allowed and self.error is not None:
            raise self.error


ALLOW = AccessDecision(allowed=True)


class AccessGate:
    """Pure decision functions for role and ownership checks."""

    @staticmethod
    def evaluate(identity: Identity | None, capability: Capability) -> AccessDecision:
        """Decide whether ``identity`` holds ``capability``."""
        if identity is None:
            return AccessDecision(allowed=False, error=UnauthorizedError())
        if identity.role in _ALLOWED_ROLES[capability]:
            return ALLOW
        return AccessDecision(
            allowed=False,
            error=ForbiddenRoleError(_DENIED_MESSAGES[capability]),
        )

    @staticmethod
    def require(identity: Identity | None, capability: Capability) -> Identity:
        """Return the identity if it holds ``capability``, else raise.

        Raises:
            UnauthorizedError: If there is no identity.
            ForbiddenRoleError: If the role does not match.
        """
        AccessGate.evaluate(identity, capability).raise_if_denied()
        assert identity is not None
        return identity

    @staticmethod
    def can_access_document(identity: Identity, owner_id: str) -> bool:
        """Owner-or-admin rule used for read, update, edit and download."""
        return identity.id == owner_id or identity.role is Role.ADMIN

    @staticmethod
    def is_literal_owner(identity: Identity, owner_id: str) -> bool:
        """Owner-only rule used for delete and duplicate. No admin override."""
        return identity.id == owner_id

    @staticmethod
    def evaluate_document(
        identity: Identity, owner_id: str, *, owner_only: bool = False
    ) -> AccessDecision:
        """Decide whether ``identity`` may act on a document owned by ``owner_id``."""
        permitted = (
            AccessGate.is_literal_owner(identity, owner_id)
            if owner_only
            else AccessGate.can_access_document(identity, owner_id)
        )
        if permitted:
            return ALLOW
        return AccessDecision(allowed=False, error=NotFoundError(DOCUMENT_NOT_FOUND))
