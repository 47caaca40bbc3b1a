"""User account use cases: listing, updates, soft-delete and admin bootstrap."""
import logging
from typing import Optional

from photo_accounts.core.constants import UserErrorDetails
from photo_accounts.core.handler import (
    BadRequestException,
    ForbiddenException,
    NotFoundException,
)
from photo_accounts.core.security import generate_random_password
from photo_accounts.interfaces.crypto import ICryptoRepository
from photo_accounts.interfaces.user import IUserRepository, UserListFilter
from photo_accounts.schemas.user import (
    AuthUser,
    CreateUserRequest,
    PasswordPrompt,
    ProfileImage,
    ResetAdminPasswordResult,
    UpdateUserRequest,
    UserCountRequest,
    UserCountResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        user_repository: IUserRepository,
        crypto_repository: ICryptoRepository
    ):
        self.user_repository = user_repository
        self.crypto_repository = crypto_repository

    async def get_all_users(self, auth_user: AuthUser, include_deleted: bool = False) -> list[UserResponse]:
        """List every account except the caller's own."""
        users = await self.user_repository.get_list(
            UserListFilter(exclude_id=auth_user.id, include_deleted=include_deleted)
        )
        return [UserResponse.from_account(user) for user in users]

    async def get_user_by_id(self, user_id: str, include_deleted: bool = False) -> UserResponse:
        user = await self.user_repository.get(user_id, include_deleted)
        if not user:
            raise NotFoundException(UserErrorDetails.USER_NOT_FOUND, data={"user_id": user_id})
        return UserResponse.from_account(user)

    async def get_user_info(self, auth_user: AuthUser) -> UserResponse:
        """Load the caller's own account.

        The caller was authenticated moments ago, so a missing record is an
        inconsistent state and reported as a bad request, not a 404.
        """
        user = await self.user_repository.get(auth_user.id)
        if not user:
            raise BadRequestException(UserErrorDetails.USER_INFO_UNAVAILABLE)
        return UserResponse.from_account(user)

    async def get_user_count(self, request: UserCountRequest) -> UserCountResponse:
        users = await self.user_repository.get_list()
        if request.admin:
            users = [user for user in users if user.is_admin]
        return UserCountResponse(user_count=len(users))

    async def update_user(self, auth_user: AuthUser, request: UpdateUserRequest) -> UserResponse:
        """Apply a partial update on behalf of the caller.

        Args:
            auth_user: The authenticated caller
            request: Target id plus the fields to change

        Returns:
            The updated account

        Raises:
            ForbiddenException: A non-admin targets another account
            BadRequestException: An admin promotes another account, or the
                new email belongs to a different account
            NotFoundException: The target account does not exist
        """
        user_id = request.id
        changes = request.changes()

        if user_id != auth_user.id and not auth_user.is_admin:
            logger.warning(f"User {auth_user.id} tried to update user {user_id}")
            raise ForbiddenException(UserErrorDetails.UPDATE_FORBIDDEN)

        if not auth_user.is_admin:
            # Users can never change the admin flag
            changes.pop("is_admin", None)
        elif changes.get("is_admin") and user_id != auth_user.id:
            raise BadRequestException(UserErrorDetails.ADMIN_PROMOTION_FORBIDDEN)
        elif changes.get("is_admin") is False and user_id == auth_user.id:
            # The server must keep its admin
            raise BadRequestException(UserErrorDetails.ADMIN_DEMOTION_FORBIDDEN)

        user = await self.user_repository.get(user_id)
        if not user:
            raise NotFoundException(UserErrorDetails.USER_NOT_FOUND, data={"user_id": user_id})

        if "email" in changes:
            duplicate = await self.user_repository.get_by_email(changes["email"])
            if duplicate and duplicate.id != user.id:
                raise BadRequestException(UserErrorDetails.EMAIL_IN_USE)

        if "password" in changes:
            changes["hashed_password"] = await self.crypto_repository.hash_password(changes.pop("password"))

        updated = await self.user_repository.update(user.id, changes)
        logger.info(f"User {updated.id} updated by {auth_user.id} ({', '.join(sorted(changes)) or 'no fields'})")
        return UserResponse.from_account(updated)

    async def create_user(self, request: CreateUserRequest) -> UserResponse:
        """Create an ordinary account; an admin has to exist first."""
        admin = await self.user_repository.get_admin()
        if not admin:
            raise BadRequestException(UserErrorDetails.ADMIN_MISSING)

        created = await self._create(request, is_admin=False, should_change_password=True)
        logger.info(f"Created user {created.id}")
        return created

    async def sign_up_admin(self, request: CreateUserRequest) -> UserResponse:
        """Create the administrator account while the server has none."""
        admin = await self.user_repository.get_admin()
        if admin:
            raise BadRequestException(UserErrorDetails.ADMIN_EXISTS)

        created = await self._create(request, is_admin=True, should_change_password=False)
        logger.info(f"Created admin user {created.id}")
        return created

    async def _create(self, request: CreateUserRequest, is_admin: bool, should_change_password: bool) -> UserResponse:
        existing = await self.user_repository.get_by_email(request.email)
        if existing:
            raise BadRequestException(UserErrorDetails.USER_EXISTS, data={"email": request.email})

        user = await self.user_repository.create(
            {
                "email": request.email,
                "first_name": request.first_name,
                "last_name": request.last_name,
                "hashed_password": await self.crypto_repository.hash_password(request.password),
                "is_admin": is_admin,
                "should_change_password": should_change_password,
            }
        )
        return UserResponse.from_account(user)

    async def delete_user(self, auth_user: AuthUser, user_id: str) -> None:
        """Soft-delete an account. Only an admin may delete, and never an admin account."""
        if not auth_user.is_admin:
            logger.warning(f"Non-admin user {auth_user.id} tried to delete user {user_id}")
            raise ForbiddenException(UserErrorDetails.ADMIN_REQUIRED)

        if user_id == auth_user.id:
            raise ForbiddenException(UserErrorDetails.DELETE_ADMIN_FORBIDDEN)

        user = await self.user_repository.get(user_id)
        if not user:
            raise NotFoundException(UserErrorDetails.USER_NOT_FOUND, data={"user_id": user_id})
        if user.is_admin:
            raise ForbiddenException(UserErrorDetails.DELETE_ADMIN_FORBIDDEN)

        await self.user_repository.delete(user.id)
        logger.info(f"User {user.id} deleted by {auth_user.id}")

    async def restore_user(self, auth_user: AuthUser, user_id: str) -> UserResponse:
        user = await self.user_repository.get(user_id, True)
        if not auth_user.is_admin:
            logger.warning(f"Non-admin user {auth_user.id} tried to restore user {user_id}")
            raise ForbiddenException(UserErrorDetails.ADMIN_REQUIRED)
        if not user:
            raise NotFoundException(UserErrorDetails.USER_NOT_FOUND, data={"user_id": user_id})
        if not user.is_deleted:
            raise BadRequestException(UserErrorDetails.USER_NOT_DELETED)

        duplicate = await self.user_repository.get_by_email(user.email)
        if duplicate and duplicate.id != user.id:
            raise BadRequestException(UserErrorDetails.EMAIL_IN_USE)

        restored = await self.user_repository.restore(user.id)
        logger.info(f"User {restored.id} restored by {auth_user.id}")
        return UserResponse.from_account(restored)

    async def create_profile_image(self, auth_user: AuthUser, file_path: str) -> UserResponse:
        """Store a profile image path on the caller's own account."""
        updated = await self.user_repository.update(auth_user.id, {"profile_image_path": file_path})
        logger.info(f"Profile image set for user {auth_user.id}")
        return UserResponse.from_account(updated)

    async def get_user_profile_image(self, user_id: str) -> ProfileImage:
        user = await self.user_repository.get(user_id)
        if not user:
            raise NotFoundException(UserErrorDetails.USER_NOT_FOUND, data={"user_id": user_id})
        if not user.profile_image_path:
            raise NotFoundException(UserErrorDetails.PROFILE_IMAGE_MISSING, data={"user_id": user_id})
        return ProfileImage(user_id=user.id, profile_image_path=user.profile_image_path)

    async def reset_admin_password(self, ask: PasswordPrompt) -> ResetAdminPasswordResult:
        """Set a new admin password, asking for one first.

        Args:
            ask: Awaitable prompt; returning None or an empty string means
                a random password should be generated

        Returns:
            The admin account, the plaintext password (to be shown once),
            and whether it came from the prompt
        """
        admin = await self.user_repository.get_admin()
        if not admin:
            raise BadRequestException(UserErrorDetails.ADMIN_ACCOUNT_MISSING)

        provided_password: Optional[str] = await ask()
        password = provided_password or generate_random_password()

        hashed_password = await self.crypto_repository.hash_password(password)
        updated = await self.user_repository.update(admin.id, {"hashed_password": hashed_password})
        logger.info(f"Admin password reset for user {admin.id} (provided={bool(provided_password)})")
        return ResetAdminPasswordResult(
            admin=UserResponse.from_account(updated),
            password=password,
            provided=bool(provided_password),
        )
