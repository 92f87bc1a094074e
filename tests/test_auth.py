"""Tests for session resolution and account endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from fotografia.domain.models import Identity
from fotografia.errors import Unauthorized, ValidationError
from fotografia.services.accounts import AccountService
from fotografia.services.identity import IdentityService
from tests.conftest import FakeAccountGateway, FakeIdentityProvider


def test_authenticate_accepts_bearer_token() -> None:
    identity = Identity(user_id=uuid4(), email="ana@example.com")
    service = IdentityService(FakeIdentityProvider(identities={"tok": identity}))

    assert service.authenticate("Bearer tok") == identity
    assert service.authenticate("bearer   tok ") == identity


@pytest.mark.parametrize(
    "header", [None, "", "tok", "Basic tok", "Bearer ", "Bearer x"]
)
def test_authenticate_rejects_bad_headers(header: str | None) -> None:
    identity = Identity(user_id=uuid4(), email=None)
    service = IdentityService(FakeIdentityProvider(identities={"tok": identity}))

    with pytest.raises(Unauthorized):
        service.authenticate(header)


def test_sign_up_joins_phone_parts() -> None:
    gateway = FakeAccountGateway()
    service = AccountService(gateway)

    message = service.sign_up(
        email="ana@example.com",
        password="secret123",
        confirm_password="secret123",
        ddd="11",
        numero="987654321",
    )

    assert message == "check-email"
    assert gateway.sign_ups == [("ana@example.com", "11987654321")]


def test_sign_up_rejects_password_mismatch() -> None:
    gateway = FakeAccountGateway()
    service = AccountService(gateway)

    with pytest.raises(ValidationError) as excinfo:
        service.sign_up("ana@example.com", "secret123", "other", "11", "9")

    assert excinfo.value.message == "password-mismatch"
    assert gateway.sign_ups == []


def test_sign_up_provider_failure() -> None:
    service = AccountService(FakeAccountGateway(fail_sign_up=True))

    with pytest.raises(ValidationError) as excinfo:
        service.sign_up("ana@example.com", "secret123", "secret123", "11", "9")

    assert excinfo.value.message == "signup-error"


def test_sign_in_rejects_bad_credentials() -> None:
    service = AccountService(FakeAccountGateway())

    with pytest.raises(Unauthorized):
        service.sign_in("ana@example.com", "wrong")


def test_signup_endpoint(
    client: TestClient, account_gateway: FakeAccountGateway
) -> None:
    response = client.post(
        "/auth/signup",
        data={
            "email": "ana@example.com",
            "password": "secret123",
            "confirmPassword": "secret123",
            "ddd": "21",
            "numero": "912345678",
        },
    )

    assert response.status_code == 201
    assert response.json() == {"message": "check-email"}
    assert account_gateway.sign_ups == [("ana@example.com", "21912345678")]


def test_signup_endpoint_password_mismatch(client: TestClient) -> None:
    response = client.post(
        "/auth/signup",
        data={
            "email": "ana@example.com",
            "password": "secret123",
            "confirmPassword": "secret124",
        },
    )

    assert response.status_code == 400
    assert response.json()["error"] == "password-mismatch"


def test_login_endpoint(client: TestClient) -> None:
    response = client.post(
        "/auth/login", data={"email": "ana@example.com", "password": "secret123"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["access_token"] == "access"
    assert body["token_type"] == "bearer"


def test_login_endpoint_invalid_credentials(client: TestClient) -> None:
    response = client.post(
        "/auth/login", data={"email": "ana@example.com", "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "invalid-credentials"}
