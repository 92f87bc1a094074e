"""Supabase Auth adapter for sessions and accounts."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from fotografia.domain.models import AuthTokens, Identity
from fotografia.services.accounts import AccountGateway
from fotografia.services.identity import IdentityProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthClient(IdentityProvider, AccountGateway):
    """Resolves sessions and manages accounts through Supabase Auth."""

    client: Client

    def get_identity(self, access_token: str) -> Identity | None:
        """Return the identity for a user access token."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError:
            logger.info("Rejected access token")
            return None
        if response is None or response.user is None:
            return None
        user = response.user
        metadata = user.user_metadata or {}
        phone = metadata.get("phone") or user.phone or None
        return Identity(user_id=UUID(user.id), email=user.email, phone=phone)

    def sign_up(self, email: str, password: str, phone: str) -> None:
        """Register a new account with the phone number in its metadata."""
        self.client.auth.sign_up(
            {
                "email": email,
                "password": password,
                "options": {"data": {"phone": phone}},
            }
        )

    def sign_in(self, email: str, password: str) -> AuthTokens | None:
        """Exchange email and password for session tokens."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError:
            return None
        if response.session is None or response.user is None:
            return None
        return AuthTokens(
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            user_id=UUID(response.user.id),
        )
