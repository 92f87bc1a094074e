"""Account endpoints backed by the identity provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Form, Request, status

from fotografia.api.schemas import TokensOut

if TYPE_CHECKING:
    from fotografia.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(  # noqa: PLR0913
    request: Request,
    email: str = Form(default=""),
    password: str = Form(default=""),
    confirm_password: str = Form(default="", alias="confirmPassword"),
    ddd: str = Form(default=""),
    numero: str = Form(default=""),
) -> dict[str, str]:
    """Register an account; the user confirms it by email."""
    container: AppContainer = request.app.state.container
    message = container.account_service.sign_up(
        email=email,
        password=password,
        confirm_password=confirm_password,
        ddd=ddd,
        numero=numero,
    )
    return {"message": message}


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(default=""),
    password: str = Form(default=""),
) -> TokensOut:
    """Exchange credentials for a bearer token."""
    container: AppContainer = request.app.state.container
    tokens = container.account_service.sign_in(email, password)
    return TokensOut.from_tokens(tokens)
