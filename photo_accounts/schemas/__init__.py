"""Pydantic schemas for request/response validation."""
from photo_accounts.schemas.user import (
    AuthUser,
    CreateUserRequest,
    UpdateUserRequest,
    UserCountRequest,
    UserCountResponse,
    UserResponse,
    ProfileImage,
    ResetAdminPasswordResult,
)

__all__ = [
    "AuthUser",
    "CreateUserRequest",
    "UpdateUserRequest",
    "UserCountRequest",
    "UserCountResponse",
    "UserResponse",
    "ProfileImage",
    "ResetAdminPasswordResult",
]
