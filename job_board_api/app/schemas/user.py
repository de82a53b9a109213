"""
Pydantic models for user data.

Defines schemas for registering, logging in, reading and updating
users.  ``UserRead`` never carries the password hash; it is the only
user shape the API returns.
"""

from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from ..core.config import settings


AccountKind = Literal["candidate", "company"]


class UserBase(BaseModel):
    email: EmailStr = Field(..., examples=["jane@example.com"])
    name: str = Field(..., min_length=1, examples=["Jane Doe"])
    type: AccountKind = Field(..., examples=["candidate"])
    company: Optional[str] = Field(None, examples=["Acme Corp"])
    title: Optional[str] = Field(None, examples=["Backend Engineer"])
    location: Optional[str] = Field(None, examples=["Berlin"])
    bio: Optional[str] = None
    avatar: Optional[str] = None

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class UserCreate(UserBase):
    """Schema for registering a user.

    ``confirmPassword`` must repeat ``password``; the comparison is
    done by ``UserService.register`` so a mismatch is reported as a
    business validation failure.
    """

    password: str = Field(..., min_length=settings.password_min_length)
    confirm_password: str = Field(..., alias="confirmPassword", min_length=settings.password_min_length)


class UserLogin(BaseModel):
    """Credentials for ``POST /auth/login``."""

    email: EmailStr
    password: str = Field(..., min_length=settings.password_min_length)


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
    # Stored addresses were validated on the way in.
    email: str


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile.

    E-mail, password and account type are not part of this schema;
    if a client sends them they are ignored.
    """

    name: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None

    def to_changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True)
        # A name is required on every user record.
        if changes.get("name", "") is None:
            changes.pop("name")
        return changes


class AuthResponse(BaseModel):
    user: UserRead
    token: str
