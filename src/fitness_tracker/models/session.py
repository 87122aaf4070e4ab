"""Authentication session model."""

from dataclasses import dataclass
from enum import Enum


class SessionState(str, Enum):
    """Session manager lifecycle state."""

    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    REFRESHING = "refreshing"


@dataclass(frozen=True)
class Session:
    """Tokens for the signed-in user.

    Sessions are immutable; a refresh produces a new instance.
    """

    access_token: str
    refresh_token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def with_access_token(self, access_token: str, refresh_token: str | None = None) -> "Session":
        """Return a copy carrying a refreshed access token."""
        return Session(
            access_token=access_token,
            refresh_token=refresh_token or self.refresh_token,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        """Create from a stored dictionary."""
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
        )

    @classmethod
    def from_token_response(cls, data: dict | None) -> "Session | None":
        """Build a session from a login/register/refresh response.

        Accepts ``access``/``refresh`` as well as ``access_token``/``refresh_token``,
        either at the top level or nested under ``tokens``.
        Returns None when the payload carries no access token.
        """
        if not isinstance(data, dict):
            return None
        if isinstance(data.get("tokens"), dict):
            data = data["tokens"]

        access = data.get("access") or data.get("access_token")
        if not access:
            return None
        refresh = data.get("refresh") or data.get("refresh_token")
        return cls(access_token=access, refresh_token=refresh)

    def __repr__(self) -> str:
        # Keep tokens out of logs and tracebacks
        return f"Session(is_authenticated={self.is_authenticated}, has_refresh={self.refresh_token is not None})"
