"""User profile model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserProfile:
    """Read-only projection of the signed-in user, as returned by the backend."""

    id: int | str | None
    username: str
    email: str
    first_name: str = ""
    last_name: str = ""
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        full = f"{self.first_name} {self.last_name}".strip()
        return full or self.username

    @property
    def member_since(self) -> str:
        """Get a human-readable join date."""
        if self.created_at is None:
            return "N/A"
        return self.created_at.strftime("%Y-%m-%d")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        """Create from a backend payload."""
        created_at = None
        raw = data.get("created_at") or data.get("date_joined")
        if raw:
            try:
                created_at = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
            except ValueError:
                created_at = None

        return cls(
            id=data.get("id"),
            username=data.get("username", ""),
            email=data.get("email", ""),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            created_at=created_at,
        )
