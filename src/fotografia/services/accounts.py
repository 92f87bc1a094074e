"""Account registration and sign-in."""

import logging
from dataclasses import dataclass
from typing import Protocol

from fotografia.domain.models import AuthTokens
from fotografia.errors import Unauthorized, ValidationError

logger = logging.getLogger(__name__)

SIGNUP_OK = "check-email"


class AccountGateway(Protocol):
    """Interface for the identity provider's account operations."""

    def sign_up(self, email: str, password: str, phone: str) -> None:
        """Register an account; raises on provider failure."""

    def sign_in(self, email: str, password: str) -> AuthTokens | None:
        """Return session tokens, or None for bad credentials."""


@dataclass
class AccountService:
    """Application service for account lifecycle actions."""

    gateway: AccountGateway

    def sign_up(  # noqa: PLR0913
        self,
        email: str,
        password: str,
        confirm_password: str,
        ddd: str,
        numero: str,
    ) -> str:
        """Register a new account and return the follow-up message code."""
        missing = [
            name
            for name, value in (("email", email), ("password", password))
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError("Missing required form fields", fields=missing)
        if password != confirm_password:
            raise ValidationError("password-mismatch", fields=["confirmPassword"])
        phone = f"{ddd.strip()}{numero.strip()}"
        try:
            self.gateway.sign_up(email.strip(), password, phone)
        except Exception as exc:
            logger.exception("Sign up failed", extra={"email": email})
            raise ValidationError("signup-error") from exc
        return SIGNUP_OK

    def sign_in(self, email: str, password: str) -> AuthTokens:
        """Exchange credentials for session tokens."""
        if not email or not password:
            raise Unauthorized("invalid-credentials")
        tokens = self.gateway.sign_in(email.strip(), password)
        if tokens is None:
            raise Unauthorized("invalid-credentials")
        return tokens
