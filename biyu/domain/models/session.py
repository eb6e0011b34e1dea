"""Domain model for the authenticated session."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionContext:
    """Identity of the user the application acts for.

    Attributes:
        owner_id: Identifier of the authenticated owner.
        email: Optional email used for display.
    """

    owner_id: str
    email: str | None = None

    @property
    def display_name(self) -> str:
        """Return the email, or a generic label when missing."""
        return self.email or "User"


__all__ = ["SessionContext"]
