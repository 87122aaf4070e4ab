"""Base view model with a mount/unmount lifecycle."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from ..application import Application
from ..auth.guard import LOGIN_PATH
from ..errors import ApiError, AuthenticationFailure
from .messages import describe_error, field_messages

logger = logging.getLogger(__name__)

T = TypeVar("T")


def as_records(payload: Any) -> list[dict]:
    """Get the list of records from a plain or paginated list payload."""
    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        payload = payload["results"]
    if isinstance(payload, list):
        return [record for record in payload if isinstance(record, dict)]
    return []


class View:
    """State holder for one screen.

    A view is *alive* while it is mounted and, for views that need a
    session, while the user is still signed in. Results of calls that
    complete after the view died are dropped instead of applied, which
    covers both "closed before the response arrived" and "signed out while
    a request was in flight".
    """

    requires_auth = True
    error_action: str | None = None

    def __init__(self, app: Application):
        self.app = app
        self.mounted = False
        self.loading = False
        self.error: str | None = None
        self.field_errors: dict[str, str] = {}
        self.redirect_to: str | None = None

    @property
    def alive(self) -> bool:
        if not self.mounted:
            return False
        return not self.requires_auth or self.app.context.is_authenticated

    def mount(self) -> "View":
        self.mounted = True
        return self

    def unmount(self) -> None:
        self.mounted = False

    def navigate(self, path: str) -> str:
        """Ask the navigator to move and remember where we landed."""
        self.redirect_to = self.app.navigator.navigate(path)
        return self.redirect_to

    async def run(
        self,
        call: Awaitable[T],
        apply: Callable[[T], Any] | None = None,
    ) -> bool:
        """Await ``call`` and hand its result to ``apply`` if still alive.

        API errors become ``error``/``field_errors``. An authentication
        failure that cost us the session sends the user to the login view.

        Returns:
            True if the call succeeded and its result was applied
        """
        if not self.alive:
            # Drop coroutines that will never run to avoid "never awaited" warnings
            if hasattr(call, "close"):
                call.close()
            return False

        self.loading = True
        self.error = None
        self.field_errors = {}
        try:
            result = await call
        except ApiError as e:
            logger.debug("%s call failed: %s", type(self).__name__, e)
            if isinstance(e, AuthenticationFailure) and not self.app.context.is_authenticated:
                if self.requires_auth:
                    self.navigate(LOGIN_PATH)
            if self.mounted:
                self.error = describe_error(e, self.error_action)
                self.field_errors = field_messages(e)
            return False
        finally:
            if self.mounted:
                self.loading = False

        if not self.alive:
            logger.debug("%s no longer alive, discarding result", type(self).__name__)
            return False
        if apply is not None:
            apply(result)
        return True
