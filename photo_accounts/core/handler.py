"""Application exceptions raised by the account services."""
from photo_accounts.core.constants import GeneralErrorDetails


class AppException(Exception):
    """Custom application exception with message, status code, and optional data."""

    def __init__(self, message: str, status_code: int = 400, data: dict = None):
        self.message = message
        self.status_code = status_code
        self.data = data or {}
        super().__init__(self.message)


class BadRequestException(AppException):
    """The request is well formed but not allowed in the current state."""

    def __init__(self, message: str = GeneralErrorDetails.BAD_REQUEST, data: dict = None):
        super().__init__(message, status_code=400, data=data)


class ForbiddenException(AppException):
    """The caller is not authorized to perform the mutation."""

    def __init__(self, message: str = GeneralErrorDetails.FORBIDDEN, data: dict = None):
        super().__init__(message, status_code=403, data=data)


class NotFoundException(AppException):
    """The requested record does not exist."""

    def __init__(self, message: str = GeneralErrorDetails.NOT_FOUND, data: dict = None):
        super().__init__(message, status_code=404, data=data)
