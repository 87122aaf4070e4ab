"""Token storage backends."""

from typing import Protocol, runtime_checkable

from ..models.session import Session


@runtime_checkable
class TokenStore(Protocol):
    """Somewhere to keep the session between runs."""

    async def load(self) -> Session | None:
        """Return the stored session, if any."""
        ...

    async def save(self, session: Session) -> None:
        """Replace the stored session."""
        ...

    async def clear(self) -> None:
        """Forget the stored session."""
        ...


class MemoryTokenStore:
    """Keeps the session for the lifetime of the process only."""

    def __init__(self, session: Session | None = None):
        self._session = session

    async def load(self) -> Session | None:
        return self._session

    async def save(self, session: Session) -> None:
        self._session = session

    async def clear(self) -> None:
        self._session = None
