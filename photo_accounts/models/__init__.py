"""Account entity and SQLAlchemy ORM models."""
from photo_accounts.models.account import Active, Deleted, UserAccount
from photo_accounts.models.user import User

__all__ = [
    "Active",
    "Deleted",
    "UserAccount",
    "User",
]
