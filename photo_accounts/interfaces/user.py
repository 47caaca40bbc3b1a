from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from photo_accounts.models.account import UserAccount


@dataclass(frozen=True)
class UserListFilter:
    """Narrows the accounts returned by get_list."""

    exclude_id: Optional[str] = None
    include_deleted: bool = False


class IUserRepository(ABC):
    @abstractmethod
    async def get(self, user_id: str, include_deleted: bool = False) -> Optional[UserAccount]:
        """Retrieve a user by id."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str, include_deleted: bool = False) -> Optional[UserAccount]:
        """Retrieve a user by email."""
        pass

    @abstractmethod
    async def get_list(self, filter: Optional[UserListFilter] = None) -> list[UserAccount]:
        """List users matching the filter."""
        pass

    @abstractmethod
    async def get_admin(self) -> Optional[UserAccount]:
        """Retrieve the administrator account, if one exists."""
        pass

    @abstractmethod
    async def create(self, user_data: dict) -> UserAccount:
        """Create a user and return it."""
        pass

    @abstractmethod
    async def update(self, user_id: str, user_data: dict) -> UserAccount:
        """Apply a partial update and return the updated user.

        Args:
            user_id: The id of the user
            user_data: UserAccount field names mapped to their new values
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> UserAccount:
        """Soft-delete a user."""
        pass

    @abstractmethod
    async def restore(self, user_id: str) -> UserAccount:
        """Bring a soft-deleted user back to the active state."""
        pass
