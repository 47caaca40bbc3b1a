import asyncio
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from photo_accounts.interfaces.user import IUserRepository, UserListFilter
from photo_accounts.models.account import UserAccount

UPDATABLE_FIELDS = frozenset(
    {
        "email",
        "first_name",
        "last_name",
        "is_admin",
        "should_change_password",
        "hashed_password",
        "profile_image_path",
        "oauth_id",
    }
)


class InMemoryUserRepository(IUserRepository):
    def __init__(self):
        self._lock = asyncio.Lock()
        self._users: dict[str, UserAccount] = {}  # id -> user

    def _find_by_email(self, email: str, include_deleted: bool = False) -> Optional[UserAccount]:
        email = email.lower()
        for user in self._users.values():
            if user.email == email and (include_deleted or not user.is_deleted):
                return user
        return None

    async def get(self, user_id: str, include_deleted: bool = False) -> Optional[UserAccount]:
        """Retrieve a user by id."""
        async with self._lock:
            user = self._users.get(user_id)
            if not user or (user.is_deleted and not include_deleted):
                return None
            return replace(user)

    async def get_by_email(self, email: str, include_deleted: bool = False) -> Optional[UserAccount]:
        """Retrieve a user by email."""
        async with self._lock:
            user = self._find_by_email(email, include_deleted)
            return replace(user) if user else None

    async def get_list(self, filter: Optional[UserListFilter] = None) -> list[UserAccount]:
        """List users ordered by creation time."""
        filter = filter or UserListFilter()
        async with self._lock:
            users = [
                replace(user)
                for user in self._users.values()
                if user.id != filter.exclude_id and (filter.include_deleted or not user.is_deleted)
            ]
        return sorted(users, key=lambda user: user.created_at)

    async def get_admin(self) -> Optional[UserAccount]:
        """Retrieve the administrator account."""
        async with self._lock:
            for user in self._users.values():
                if user.is_admin and not user.is_deleted:
                    return replace(user)
            return None

    async def create(self, user_data: dict) -> UserAccount:
        """Create a user, rejecting an email held by an active account."""
        payload = dict(user_data)
        payload["email"] = payload["email"].lower()
        unknown = set(payload) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown user fields: {', '.join(sorted(unknown))}")

        async with self._lock:
            if self._find_by_email(payload["email"]):
                raise ValueError("Email already exists")
            now = datetime.now(timezone.utc)
            user = UserAccount(id=str(uuid.uuid4()), created_at=now, updated_at=now, **payload)
            self._users[user.id] = user
            return replace(user)

    async def update(self, user_id: str, user_data: dict) -> UserAccount:
        """Apply a partial update to an existing user."""
        unknown = set(user_data) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown user fields: {', '.join(sorted(unknown))}")
        updates = dict(user_data)
        if "email" in updates:
            updates["email"] = updates["email"].lower()

        async with self._lock:
            user = self._users.get(user_id)
            if not user:
                raise ValueError("User not found")
            if "email" in updates:
                owner = self._find_by_email(updates["email"])
                if owner and owner.id != user_id:
                    raise ValueError("Email already exists")
            user = replace(user, updated_at=datetime.now(timezone.utc), **updates)
            self._users[user_id] = user
            return replace(user)

    async def delete(self, user_id: str) -> UserAccount:
        """Soft-delete a user."""
        async with self._lock:
            user = self._users.get(user_id)
            if not user:
                raise ValueError("User not found")
            user = user.soft_deleted()
            self._users[user_id] = user
            return replace(user)

    async def restore(self, user_id: str) -> UserAccount:
        """Restore a soft-deleted user."""
        async with self._lock:
            user = self._users.get(user_id)
            if not user:
                raise ValueError("User not found")
            restored = user.restored()
            if self._find_by_email(user.email):
                raise ValueError("Email already exists")
            self._users[user_id] = user = restored
            return replace(user)
