from enum import StrEnum


class UserErrorDetails(StrEnum):
    """User account related error messages."""

    USER_NOT_FOUND = "User not found"
    USER_INFO_UNAVAILABLE = "Unable to load the authenticated user"
    USER_NOT_DELETED = "User is not deleted"
    EMAIL_IN_USE = "Email already in use by another account"
    USER_EXISTS = "User exists"

    UPDATE_FORBIDDEN = "Only an admin may modify other accounts"
    ADMIN_PROMOTION_FORBIDDEN = "The server already has an admin"
    ADMIN_DEMOTION_FORBIDDEN = "The admin cannot remove their own admin rights"
    ADMIN_REQUIRED = "Unauthorized"
    DELETE_ADMIN_FORBIDDEN = "Cannot delete admin user"

    ADMIN_MISSING = "The first registered account must be the administrator"
    ADMIN_EXISTS = "The server already has an admin"
    ADMIN_ACCOUNT_MISSING = "Admin account does not exist"

    PROFILE_IMAGE_MISSING = "User does not have a profile image"


class GeneralErrorDetails(StrEnum):
    """General application error messages."""

    BAD_REQUEST = "Invalid request"
    FORBIDDEN = "Access forbidden"
    NOT_FOUND = "Resource not found"
