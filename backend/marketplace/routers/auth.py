"""
Authentication router: registration, session login and logout.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from marketplace.config import get_settings
from marketplace.core.flash import get_flashed_messages
from marketplace.dependencies.services import get_account_service
from marketplace.routers.errors import to_http_exception
from marketplace.schemas.auth import (
    ClientRegisterRequest,
    LoginRequest,
    LoginResponse,
    NoticesResponse,
    RegisterRequest,
    RegisterResponse,
)
from marketplace.services.account_service import AccountService

router = APIRouter(tags=["Authentication"])

Accounts = Annotated[AccountService, Depends(get_account_service)]


@router.post(
    "/auth/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(body: RegisterRequest, accounts: Accounts):
    """
    Register a new user account.

    - **email**: Valid email address (must be unique)
    - **password**: Password (minimum 8 characters)
    - **password_confirm**: Must match password
    """
    try:
        user = await accounts.register_user(body)
    except ValueError as e:
        raise to_http_exception(e)
    return RegisterResponse(user_id=user.id, email=user.email, kind=user.kind)


@router.post(
    "/auth/register/client",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new business account",
)
async def register_client(body: ClientRegisterRequest, accounts: Accounts):
    """
    Register a business (client) account. New clients are `pending` until an
    admin approves them and stay out of public listings until then.
    """
    try:
        client = await accounts.register_client(body)
    except ValueError as e:
        raise to_http_exception(e)
    return RegisterResponse(
        user_id=client.id,
        email=client.email,
        kind=client.kind,
        message="Registration successful, pending approval",
    )


@router.get(
    "/login",
    response_model=NoticesResponse,
    summary="Login entry point",
)
async def login_page(request: Request):
    """Returns (and clears) any notices waiting for the login screen."""
    return NoticesResponse(notices=get_flashed_messages(request.session))


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login and start a session",
)
async def login(request: Request, body: LoginRequest, accounts: Accounts):
    """
    Authenticate with email and password. On success the session cookie
    carries the user id and role.
    """
    try:
        user = await accounts.authenticate(body)
    except ValueError as e:
        raise to_http_exception(e)

    request.session.clear()
    request.session["userId"] = user.id
    request.session["role"] = user.role

    return LoginResponse(
        user_id=user.id,
        role=user.role,
        redirect_to=get_settings().dashboard_path,
    )


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="End the session",
)
async def logout(request: Request):
    if not request.session.get("userId"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Not logged in",
        )
    request.session.clear()
    return {"message": "Logged out"}
