from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class User:
    """An authenticated identity as reported by the auth service."""

    id: str
    email: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "User":
        return cls(id=str(payload["id"]), email=payload.get("email"))


@dataclass(frozen=True, slots=True)
class AuthSession:
    """
    A signed-in session.

    Attributes:
        access_token: Bearer token the store uses to apply row-level policies
        refresh_token: Token for renewing the session (unused by the views)
        user: The identity this session belongs to
    """

    access_token: str
    user: User
    refresh_token: str | None = None
