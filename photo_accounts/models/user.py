"""User SQLAlchemy model."""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Boolean, String, DateTime, Index, text
from sqlalchemy.orm import Mapped, mapped_column
from photo_accounts.core.database import Base
from photo_accounts.models.account import UserAccount, lifecycle_from_deleted_at


class User(Base):
    """User model for authentication and account management."""

    __tablename__ = "users"
    __table_args__ = (
        # Email is unique among accounts that are not soft-deleted
        Index(
            "uq_users_email_active",
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    first_name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)  # Nullable for OAuth users
    oauth_id: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    should_change_password: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    profile_image_path: Mapped[str] = mapped_column(String(1024), default="", nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    def to_entity(self) -> UserAccount:
        """Convert model to the UserAccount entity handed to services."""
        return UserAccount(
            id=self.id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            is_admin=self.is_admin,
            should_change_password=self.should_change_password,
            hashed_password=self.hashed_password,
            profile_image_path=self.profile_image_path,
            oauth_id=self.oauth_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
            lifecycle=lifecycle_from_deleted_at(self.deleted_at),
        )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, admin={self.is_admin})>"
