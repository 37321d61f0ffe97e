"""Account roles and the resolved caller identity.

Accounts are login-capable identities. Each account holds exactly one role,
fixed at creation time.
"""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Roles an account can hold."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"

    @classmethod
    def parse(cls, value: str | None) -> "Role | None":
        """Return the matching role, or None for anything unrecognised."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


def normalize_email(email: str) -> str:
    """Case-normalize an email address for storage and lookup."""
    return email.strip().lower()


@dataclass(frozen=True)
class Identity:
    """The resolved caller of a request.

    Built by the identity resolver from a verified session token and the
    account's current record.

    Attributes:
        id: Account ID.
        role: Role read from the account at resolution time.
        email: Account email.
        name: Account display name.
    """

    id: str
    role: Role
    email: str
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_manager(self) -> bool:
        return self.role is Role.MANAGER
