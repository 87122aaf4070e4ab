"""User-facing error messages.

This is the only place where API errors are turned into text for people.
"""

from ..errors import (
    ApiError,
    AuthenticationFailure,
    NetworkFailure,
    NotFound,
    ServerFailure,
    Unauthenticated,
    ValidationFailure,
)

INVALID_CREDENTIALS = "Invalid email or password"
SESSION_EXPIRED = "Your session has expired. Please log in again."


def describe_error(error: ApiError, action: str | None = None) -> str:
    """Return a short message suitable for an inline error banner.

    Args:
        error: The error raised by a service call
        action: ``"login"`` or ``"register"`` for the auth forms
    """
    if isinstance(error, Unauthenticated):
        return "Please log in to continue."
    if isinstance(error, AuthenticationFailure):
        if action == "login":
            return INVALID_CREDENTIALS
        return SESSION_EXPIRED
    if isinstance(error, ValidationFailure):
        if error.field_errors:
            return "Please correct the highlighted fields."
        return error.message
    if isinstance(error, NotFound):
        return "The requested record could not be found."
    if isinstance(error, NetworkFailure):
        return "Unable to reach the server. Check your connection and try again."
    if isinstance(error, ServerFailure):
        return "The server ran into a problem. Please try again later."
    if error.status == 403:
        return "You do not have permission to do that."
    return error.message or "Something went wrong."


def field_messages(error: ApiError) -> dict[str, str]:
    """Flatten field errors to one message per field."""
    if not isinstance(error, ValidationFailure):
        return {}
    return {field: " ".join(messages) for field, messages in error.field_errors.items()}
