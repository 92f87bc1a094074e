"""Domain models for authenticated callers."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    """Represents the user bound to a session."""

    user_id: UUID
    email: str | None
    phone: str | None = None


@dataclass(frozen=True)
class AuthTokens:
    """Session tokens issued after sign-in."""

    access_token: str
    refresh_token: str
    user_id: UUID
