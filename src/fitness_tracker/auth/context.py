"""Process-wide authentication state for the UI layer."""

import logging
from collections.abc import Callable

from ..models.session import SessionState
from .manager import SessionManager

logger = logging.getLogger(__name__)

AuthListener = Callable[[bool], None]


class AuthContext:
    """Read-only view of the session for views and the route guard.

    Mirrors the SessionManager's state through a subscription and tells
    its own listeners whenever "is a user signed in" flips.
    """

    def __init__(self, manager: SessionManager):
        self._manager = manager
        self._listeners: list[AuthListener] = []
        self._unsubscribe: Callable[[], None] | None = None
        self._authenticated = False
        self.initialized = False

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    @property
    def state(self) -> SessionState:
        return self._manager.state

    async def initialize(self) -> bool:
        """Restore any stored session and start following the manager."""
        if self._unsubscribe is None:
            self._unsubscribe = self._manager.subscribe(self._on_state_change)
        await self._manager.initialize()
        self._update(self._manager.is_authenticated)
        self.initialized = True
        return self._authenticated

    def close(self) -> None:
        """Stop following the manager and drop all listeners."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()
        self._authenticated = False
        self.initialized = False

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener called with the new authenticated flag."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _on_state_change(self, state: SessionState) -> None:
        # Refreshing keeps the previous answer; only settled states count
        if state == SessionState.AUTHENTICATED:
            self._update(True)
        elif state == SessionState.ANONYMOUS:
            self._update(False)

    def _update(self, authenticated: bool) -> None:
        if authenticated == self._authenticated:
            return
        self._authenticated = authenticated
        logger.debug("Auth context authenticated=%s", authenticated)
        for listener in list(self._listeners):
            listener(authenticated)
