"""
Authentication endpoints for API v1.

Registration and login both answer with the public user record and a
bearer token valid for 24 hours.  ``/me`` reads the current state of
the account from the store rather than trusting the token's claims.
"""

from fastapi import APIRouter, Depends, status

from job_board_api.app.core.errors import JobBoardError, to_http_exception
from job_board_api.app.core.security import Actor, get_current_user
from job_board_api.app.schemas.user import AuthResponse, UserCreate, UserLogin, UserRead
from job_board_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate) -> AuthResponse:
    """Register a candidate or company account.

    Returns 409 when the e-mail is already registered and 400 when the
    password confirmation does not match.
    """
    try:
        return await UserService.register(user)
    except JobBoardError as e:
        raise to_http_exception(e) from e


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin) -> AuthResponse:
    """Exchange e-mail and password for a token."""
    try:
        return await UserService.login(credentials.email, credentials.password)
    except JobBoardError as e:
        raise to_http_exception(e) from e


@router.get("/me", response_model=UserRead)
async def me(current_user: Actor = Depends(get_current_user)) -> UserRead:
    try:
        return await UserService.get_user(current_user.id)
    except JobBoardError as e:
        raise to_http_exception(e) from e
