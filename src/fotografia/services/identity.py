"""Session resolution."""

from dataclasses import dataclass
from typing import Protocol

from fotografia.domain.models import Identity
from fotografia.errors import Unauthorized


class IdentityProvider(Protocol):
    """Interface for resolving access tokens to identities."""

    def get_identity(self, access_token: str) -> Identity | None:
        """Return the identity bound to a token, if the token is valid."""


@dataclass
class IdentityService:
    """Resolves the caller behind an Authorization header."""

    provider: IdentityProvider

    def authenticate(self, authorization: str | None) -> Identity:
        """Return the caller identity or raise Unauthorized."""
        token = _parse_bearer(authorization)
        if token is None:
            raise Unauthorized("Unauthorized")
        identity = self.provider.get_identity(token)
        if identity is None:
            raise Unauthorized("Unauthorized")
        return identity


def _parse_bearer(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
