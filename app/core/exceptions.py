from typing import Dict, Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base for every error the API reports to the notification surface.

    ``kind`` is the notification status (success|danger|warning|info) and
    ``errors`` optionally maps form fields to a reason.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something went wrong"
    kind = "danger"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
            headers=headers,
        )
        self.errors = errors or {}

    @property
    def message(self) -> str:
        return self.detail


class FieldValidationError(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Please fix the highlighted fields"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "User not authenticated"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "This CNIC already exists for this user"


class BackendError(AppError):
    # Deliberately generic: store messages are logged, never returned.
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Request failed"


# Field-level failures raised by app.core.validators

class FieldError(ValueError):
    pass


class RequiredError(FieldError):
    pass


class FormatError(FieldError):
    pass


class TooShortError(FieldError):
    pass


class FutureDateError(FieldError):
    pass


class ChoiceError(FieldError):
    pass
