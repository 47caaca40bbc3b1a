import re
from datetime import datetime
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from photo_accounts.models.account import UserAccount

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


def _normalize_email(v: str) -> str:
    v = v.strip().lower()
    if not re.match(EMAIL_PATTERN, v):
        raise ValueError("Invalid email format")
    return v


class AuthUser(BaseModel):
    """Identity of the authenticated caller."""
    model_config = ConfigDict(frozen=True)
    id: str
    email: str
    is_admin: bool = False


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')
    email: str
    password: str = Field(min_length=1)
    first_name: str = ""
    last_name: str = ""

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _normalize_email(v)


class UpdateUserRequest(BaseModel):
    """Partial update of a user; only explicitly set fields are applied."""
    model_config = ConfigDict(extra='forbid')
    id: str
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    should_change_password: Optional[bool] = None
    is_admin: Optional[bool] = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _normalize_email(v)

    def changes(self) -> dict:
        """Fields the caller set, without the target id or null values."""
        fields = self.model_dump(exclude_unset=True, exclude={"id"})
        return {key: value for key, value in fields.items() if value is not None}


class UserCountRequest(BaseModel):
    admin: bool = False


class UserCountResponse(BaseModel):
    user_count: int


class UserResponse(BaseModel):
    """Public projection of a user account."""
    id: str
    email: str
    first_name: str
    last_name: str
    created_at: datetime
    profile_image_path: str
    should_change_password: bool
    is_admin: bool
    oauth_id: str
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_account(cls, user: UserAccount) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            profile_image_path=user.profile_image_path,
            should_change_password=user.should_change_password,
            is_admin=user.is_admin,
            oauth_id=user.oauth_id,
            deleted_at=user.deleted_at,
        )


class ProfileImage(BaseModel):
    user_id: str
    profile_image_path: str


class ResetAdminPasswordResult(BaseModel):
    admin: UserResponse
    password: str
    provided: bool


PasswordPrompt = Callable[[], Awaitable[Optional[str]]]
