"""Error types raised by the API client and services."""

import httpx


class ApiError(Exception):
    """Base exception for all backend API errors."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert error to dictionary representation."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "status": self.status,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.status:
            return f"{self.message} (Status: {self.status})"
        return self.message


class NetworkFailure(ApiError):
    """No response was received from the backend."""

    def __init__(self, message: str = "Network request failed", **kwargs):
        super().__init__(message, **kwargs)


class AuthenticationFailure(ApiError):
    """The backend rejected the credentials or token (HTTP 401)."""

    def __init__(self, message: str = "Authentication failed", **kwargs):
        kwargs.setdefault("status", 401)
        super().__init__(message, **kwargs)


class Unauthenticated(AuthenticationFailure):
    """Request rejected locally because there is no session."""

    def __init__(self, message: str = "Not authenticated", **kwargs):
        kwargs.setdefault("status", None)
        super().__init__(message, **kwargs)


class ValidationFailure(ApiError):
    """The submitted data was rejected (HTTP 400/422 or local form checks)."""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: dict[str, list[str]] | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.field_errors = field_errors or {}
        if self.field_errors:
            self.details["field_errors"] = self.field_errors


class NotFound(ApiError):
    """The requested record does not exist (HTTP 404)."""

    def __init__(self, message: str = "Not found", **kwargs):
        kwargs.setdefault("status", 404)
        super().__init__(message, **kwargs)


class ServerFailure(ApiError):
    """The backend failed to handle the request (HTTP 5xx)."""

    def __init__(self, message: str = "Server error", **kwargs):
        super().__init__(message, **kwargs)


def _decode_body(response: httpx.Response) -> dict | list | str | None:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _field_errors(body) -> dict[str, list[str]]:
    """Pull field -> messages out of a DRF-style error body."""
    if not isinstance(body, dict):
        return {}

    errors: dict[str, list[str]] = {}
    for field, value in body.items():
        if field in ("detail", "message", "code", "non_field_errors"):
            continue
        if isinstance(value, list):
            errors[field] = [str(v) for v in value]
        elif isinstance(value, str):
            errors[field] = [value]
    return errors


def _message(body, default: str) -> str:
    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            if isinstance(body.get(key), str):
                return body[key]
        non_field = body.get("non_field_errors")
        if isinstance(non_field, list) and non_field:
            return str(non_field[0])
    elif isinstance(body, str) and body.strip() and len(body) < 200:
        return body.strip()
    return default


def error_from_response(response: httpx.Response) -> ApiError:
    """Map an error response to the matching exception type."""
    status = response.status_code
    body = _decode_body(response)
    details = {"body": body} if body is not None else {}

    if status == 401:
        return AuthenticationFailure(
            _message(body, "Authentication failed"), status=status, details=details
        )
    if status in (400, 422):
        return ValidationFailure(
            _message(body, "Validation failed"),
            field_errors=_field_errors(body),
            status=status,
            details=details,
        )
    if status == 404:
        return NotFound(_message(body, "Not found"), status=status, details=details)
    if status >= 500:
        return ServerFailure(_message(body, "Server error"), status=status, details=details)

    reason = response.reason_phrase or "Request failed"
    return ApiError(_message(body, reason), status=status, details=details)
