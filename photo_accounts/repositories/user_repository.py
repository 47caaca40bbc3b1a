"""User repository implementation using PostgreSQL."""
from typing import Optional
from datetime import datetime, timezone
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from photo_accounts.interfaces.user import IUserRepository, UserListFilter
from photo_accounts.models.account import UserAccount
from photo_accounts.models.user import User
from photo_accounts.repositories.memory import UPDATABLE_FIELDS


class UserRepository(IUserRepository):
    """PostgreSQL implementation of user repository using SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, user_id: str, include_deleted: bool = False) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        if not include_deleted:
            stmt = stmt.where(User.deleted_at.is_(None))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, user_id: str, include_deleted: bool = False) -> Optional[UserAccount]:
        """Retrieve a user by id."""
        user = await self._get_model(user_id, include_deleted)
        return user.to_entity() if user else None

    async def get_by_email(self, email: str, include_deleted: bool = False) -> Optional[UserAccount]:
        """Retrieve a user by email."""
        stmt = select(User).where(User.email == email.lower())
        if not include_deleted:
            stmt = stmt.where(User.deleted_at.is_(None))
        result = await self._session.execute(stmt)
        user = result.scalars().first()
        return user.to_entity() if user else None

    async def get_list(self, filter: Optional[UserListFilter] = None) -> list[UserAccount]:
        """List users ordered by creation time."""
        filter = filter or UserListFilter()
        stmt = select(User).order_by(User.created_at.asc())
        if filter.exclude_id:
            stmt = stmt.where(User.id != filter.exclude_id)
        if not filter.include_deleted:
            stmt = stmt.where(User.deleted_at.is_(None))
        result = await self._session.execute(stmt)
        return [user.to_entity() for user in result.scalars().all()]

    async def get_admin(self) -> Optional[UserAccount]:
        """Retrieve the administrator account."""
        stmt = select(User).where(User.is_admin.is_(True), User.deleted_at.is_(None))
        result = await self._session.execute(stmt)
        user = result.scalars().first()
        return user.to_entity() if user else None

    async def create(self, user_data: dict) -> UserAccount:
        """Create a user and return it."""
        unknown = set(user_data) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown user fields: {', '.join(sorted(unknown))}")

        payload = dict(user_data)
        payload["email"] = payload["email"].lower()
        if await self.get_by_email(payload["email"]):
            raise ValueError("Email already exists")

        user = User(**payload)
        self._session.add(user)
        await self._session.flush()
        await self._session.refresh(user)
        return user.to_entity()

    async def update(self, user_id: str, user_data: dict) -> UserAccount:
        """Apply a partial update to an existing user."""
        unknown = set(user_data) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown user fields: {', '.join(sorted(unknown))}")

        update_values = dict(user_data)
        if "email" in update_values:
            update_values["email"] = update_values["email"].lower()
            owner = await self.get_by_email(update_values["email"])
            if owner and owner.id != user_id:
                raise ValueError("Email already exists")
        update_values["updated_at"] = datetime.now(timezone.utc)

        stmt = update(User).where(User.id == user_id).values(**update_values)
        await self._session.execute(stmt)
        await self._session.flush()
        return await self._reload(user_id)

    async def delete(self, user_id: str) -> UserAccount:
        """Soft-delete a user by stamping deleted_at."""
        user = await self._get_model(user_id, include_deleted=True)
        if not user:
            raise ValueError("User not found")
        entity = user.to_entity().soft_deleted()
        user.deleted_at = entity.deleted_at
        await self._session.flush()
        return await self._reload(user_id)

    async def restore(self, user_id: str) -> UserAccount:
        """Clear deleted_at on a soft-deleted user."""
        user = await self._get_model(user_id, include_deleted=True)
        if not user:
            raise ValueError("User not found")
        user.to_entity().restored()
        if await self.get_by_email(user.email):
            raise ValueError("Email already exists")
        user.deleted_at = None
        await self._session.flush()
        return await self._reload(user_id)

    async def _reload(self, user_id: str) -> UserAccount:
        user = await self._get_model(user_id, include_deleted=True)
        if not user:
            raise ValueError("User not found")
        await self._session.refresh(user)
        return user.to_entity()
