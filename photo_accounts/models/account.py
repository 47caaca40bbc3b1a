"""User account entity and its lifecycle states."""
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional, Union


@dataclass(frozen=True)
class Active:
    """The account is usable."""


@dataclass(frozen=True)
class Deleted:
    """The account was soft-deleted at the given time."""

    at: datetime


AccountLifecycle = Union[Active, Deleted]


def lifecycle_from_deleted_at(deleted_at: Optional[datetime]) -> AccountLifecycle:
    """Map a nullable deletion timestamp onto a lifecycle value."""
    if deleted_at is None:
        return Active()
    return Deleted(at=deleted_at)


@dataclass
class UserAccount:
    """A user account as held by the user store."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    is_admin: bool = False
    should_change_password: bool = False
    hashed_password: Optional[str] = None
    profile_image_path: str = ""
    oauth_id: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    lifecycle: AccountLifecycle = field(default_factory=Active)

    @property
    def is_deleted(self) -> bool:
        return isinstance(self.lifecycle, Deleted)

    @property
    def deleted_at(self) -> Optional[datetime]:
        if isinstance(self.lifecycle, Deleted):
            return self.lifecycle.at
        return None

    def soft_deleted(self, at: Optional[datetime] = None) -> "UserAccount":
        """Return a copy moved to the deleted state.

        Raises:
            ValueError: If the account is already deleted
        """
        if self.is_deleted:
            raise ValueError(f"User {self.id} is already deleted")
        return replace(self, lifecycle=Deleted(at=at or datetime.now(timezone.utc)))

    def restored(self) -> "UserAccount":
        """Return a copy moved back to the active state.

        Raises:
            ValueError: If the account is not deleted
        """
        if not self.is_deleted:
            raise ValueError(f"User {self.id} is not deleted")
        return replace(self, lifecycle=Active())

    def __repr__(self) -> str:
        return f"<UserAccount(id={self.id}, email={self.email}, admin={self.is_admin})>"
