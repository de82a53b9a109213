"""
Business logic for users.

Registration, login, the ``/me`` snapshot and profile updates.  The
password hash stays inside the store; everything returned from here
is a ``UserRead`` which has no password field.
"""

import logging
from typing import Any, Dict, Optional

from ..core.errors import ConflictError, NotFoundError, UnauthenticatedError, ValidationFailure
from ..core.security import Actor, create_user_token, hash_password, verify_password
from ..core.store import get_store
from ..schemas.user import AuthResponse, ProfileUpdate, UserCreate, UserRead


logger = logging.getLogger(__name__)


def to_user_read(record: Dict[str, Any]) -> UserRead:
    public = {key: value for key, value in record.items() if key != "password"}
    return UserRead.model_validate(public)


class UserService:
    """Service for registering, authenticating and updating users."""

    @classmethod
    async def register(cls, data: UserCreate) -> AuthResponse:
        """Create an account and issue a token for it.

        Raises ``ValidationFailure`` when the confirmation does not
        match and ``ConflictError`` when the e-mail is taken (compared
        case-insensitively).
        """
        if data.password != data.confirm_password:
            raise ValidationFailure("Passwords do not match")
        store = get_store()
        if store.get_user_by_email(data.email) is not None:
            logger.info("Registration rejected: e-mail already in use")
            raise ConflictError("User with this email already exists")
        record = data.model_dump(exclude={"password", "confirm_password"})
        record["password"] = hash_password(data.password)
        user = store.create_user(record)
        logger.info("Registered %s user %s", user["type"], user["id"])
        return AuthResponse(user=to_user_read(user), token=create_user_token(user))

    @classmethod
    async def authenticate(cls, email: str, password: str) -> Optional[Dict[str, Any]]:
        """Return the stored user if the credentials match, else ``None``."""
        user = get_store().get_user_by_email(email)
        if user is None or not verify_password(password, user["password"]):
            return None
        return user

    @classmethod
    async def login(cls, email: str, password: str) -> AuthResponse:
        user = await cls.authenticate(email, password)
        if user is None:
            logger.info("Failed login attempt")
            raise UnauthenticatedError("Invalid credentials")
        logger.info("User %s logged in", user["id"])
        return AuthResponse(user=to_user_read(user), token=create_user_token(user))

    @classmethod
    async def get_user(cls, user_id: int) -> UserRead:
        """Current snapshot of a user; ``NotFoundError`` if it is gone."""
        user = get_store().get_user_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return to_user_read(user)

    @classmethod
    async def update_profile(cls, actor: Actor, updates: ProfileUpdate) -> UserRead:
        """Update the actor's own profile fields."""
        changes = updates.to_changes()
        user = get_store().update_user(actor.id, changes)
        if user is None:
            raise NotFoundError("User not found")
        logger.info("User %s updated profile fields %s", actor.id, sorted(changes))
        return to_user_read(user)
