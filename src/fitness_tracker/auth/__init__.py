"""Session management, auth context and route guard."""

from .context import AuthContext
from .guard import HOME_PATH, LOGIN_PATH, ROUTES, Navigator, Route, RouteAccess, RouteGuard
from .manager import SessionManager
from .storage import MemoryTokenStore, TokenStore

__all__ = [
    "AuthContext",
    "HOME_PATH",
    "LOGIN_PATH",
    "MemoryTokenStore",
    "Navigator",
    "Route",
    "RouteAccess",
    "RouteGuard",
    "ROUTES",
    "SessionManager",
    "TokenStore",
]
