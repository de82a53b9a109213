"""
Profile endpoint for API v1.
"""

from fastapi import APIRouter, Depends

from job_board_api.app.core.errors import JobBoardError, to_http_exception
from job_board_api.app.core.security import Actor, get_current_user
from job_board_api.app.schemas.user import ProfileUpdate, UserRead
from job_board_api.app.services.user_service import UserService


router = APIRouter()


@router.put("", response_model=UserRead)
async def update_profile(
    updates: ProfileUpdate,
    current_user: Actor = Depends(get_current_user),
) -> UserRead:
    """Update the caller's profile.

    Only name, company, title, location, bio and avatar can change
    here; e-mail, password and account type in the body are ignored.
    """
    try:
        return await UserService.update_profile(current_user, updates)
    except JobBoardError as e:
        raise to_http_exception(e) from e
