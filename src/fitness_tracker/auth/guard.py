"""Route table, route guard and navigation."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from .context import AuthContext

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
HOME_PATH = "/dashboard"


class RouteAccess(str, Enum):
    """Who may open a route."""

    PUBLIC = "public"
    GUEST_ONLY = "guest_only"  # login/registration, bounced when signed in
    PROTECTED = "protected"


@dataclass(frozen=True)
class Route:
    """A navigable view path such as ``/workouts/:id/edit``."""

    name: str
    pattern: str
    access: RouteAccess
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        parts = []
        for segment in self.pattern.strip("/").split("/"):
            if segment.startswith(":"):
                parts.append(f"(?P<{segment[1:]}>[^/]+)")
            else:
                parts.append(re.escape(segment))
        object.__setattr__(self, "_regex", re.compile("^/" + "/".join(parts) + "$"))

    def match(self, path: str) -> dict[str, str] | None:
        """Return path parameters if ``path`` matches, else None."""
        m = self._regex.match(path)
        return m.groupdict() if m else None


# Order matters: "/workouts/new" must be tried before "/workouts/:id"
ROUTES: list[Route] = [
    Route("login", "/login", RouteAccess.GUEST_ONLY),
    Route("register", "/register", RouteAccess.GUEST_ONLY),
    Route("dashboard", "/dashboard", RouteAccess.PROTECTED),
    Route("workout_list", "/workouts", RouteAccess.PROTECTED),
    Route("workout_new", "/workouts/new", RouteAccess.PROTECTED),
    Route("workout_detail", "/workouts/:id", RouteAccess.PROTECTED),
    Route("workout_edit", "/workouts/:id/edit", RouteAccess.PROTECTED),
    Route("workout_delete", "/workouts/:id/delete", RouteAccess.PROTECTED),
]


def normalize_path(path: str) -> str:
    """Strip query string and trailing slash; ``""`` becomes ``"/"``."""
    path = path.split("?", 1)[0].split("#", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"


class RouteGuard:
    """Decides whether a navigation target is accessible.

    Signed-out users are sent to the login view for protected routes,
    signed-in users are sent to the dashboard from login/registration, and
    the root or any unknown path lands on whichever of those two applies.
    """

    def __init__(self, routes: list[Route] | None = None):
        self.routes = routes if routes is not None else ROUTES

    def resolve(self, path: str) -> tuple[Route | None, dict[str, str]]:
        """Find the route for ``path``."""
        path = normalize_path(path)
        for route in self.routes:
            params = route.match(path)
            if params is not None:
                return route, params
        return None, {}

    def check(self, path: str, authenticated: bool) -> str | None:
        """Return None if navigation to ``path`` is allowed, else the redirect target."""
        route, _ = self.resolve(path)
        fallback = HOME_PATH if authenticated else LOGIN_PATH

        if route is None:
            return fallback
        if route.access == RouteAccess.PROTECTED and not authenticated:
            return LOGIN_PATH
        if route.access == RouteAccess.GUEST_ONLY and authenticated:
            return HOME_PATH
        return None

    def is_allowed(self, path: str, authenticated: bool) -> bool:
        return self.check(path, authenticated) is None


class Navigator:
    """Explicit navigation through the route guard.

    Keeps the current location and re-checks it whenever the auth context
    changes, so losing the session on a protected view lands on the login
    view.
    """

    def __init__(self, context: AuthContext, guard: RouteGuard | None = None):
        self.context = context
        self.guard = guard or RouteGuard()
        self.current: str | None = None
        self.history: list[str] = []
        self._listeners: list[Callable[[str], None]] = []
        self._unsubscribe = context.subscribe(self._on_auth_change)

    def navigate(self, path: str) -> str:
        """Go to ``path``, following guard redirects.

        Returns:
            The path actually landed on
        """
        target = normalize_path(path)
        seen = {target}
        while True:
            redirect = self.guard.check(target, self.context.is_authenticated)
            if redirect is None or redirect in seen:
                break
            logger.debug("Guard redirected %s -> %s", target, redirect)
            target = redirect
            seen.add(target)

        if target != self.current:
            self.current = target
            self.history.append(target)
            for listener in list(self._listeners):
                listener(target)
        return target

    def on_navigate(self, listener: Callable[[str], None]) -> Callable[[], None]:
        """Register a listener called with each new location."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        self._unsubscribe()
        self._listeners.clear()

    def _on_auth_change(self, authenticated: bool) -> None:
        if self.current is not None and not self.guard.is_allowed(self.current, authenticated):
            self.navigate(self.current)
