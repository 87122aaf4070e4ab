"""Wiring of the client core shared by the CLI and the web front end."""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx

from .auth.context import AuthContext
from .auth.guard import Navigator, RouteGuard
from .auth.manager import SessionManager
from .auth.storage import MemoryTokenStore, TokenStore
from .clients.api import ApiClient
from .config import Settings, get_settings
from .db.engine import get_db_path
from .db.repositories import SessionRepository
from .services.meals import MealService
from .services.workouts import WorkoutService

logger = logging.getLogger(__name__)


@dataclass
class Application:
    """One configured client: HTTP adapter, session, auth context and services."""

    settings: Settings
    client: ApiClient
    sessions: SessionManager
    context: AuthContext
    navigator: Navigator
    workouts: WorkoutService
    meals: MealService

    async def start(self) -> None:
        """Restore any stored session."""
        authenticated = await self.context.initialize()
        logger.info(
            "Client started against %s (authenticated=%s)",
            self.settings.api_base_url,
            authenticated,
        )

    async def close(self) -> None:
        """Tear down subscriptions and close the HTTP client."""
        self.navigator.close()
        self.context.close()
        await self.client.aclose()


def build_token_store(settings: Settings) -> TokenStore:
    """Create the token store selected in settings."""
    if settings.token_storage == "memory":
        return MemoryTokenStore()
    return SessionRepository(get_db_path(settings.data_dir))


def create_application(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    store: TokenStore | None = None,
) -> Application:
    """Build the client core.

    Args:
        settings: Settings to use (defaults to the process-wide settings)
        transport: Optional httpx transport, used to fake the backend in tests
        store: Token store; defaults to the one selected in settings
    """
    settings = settings or get_settings()
    client = ApiClient(
        settings.api_base_url,
        timeout=settings.request_timeout,
        transport=transport,
    )
    sessions = SessionManager(client, store if store is not None else build_token_store(settings))
    context = AuthContext(sessions)
    navigator = Navigator(context, RouteGuard())

    return Application(
        settings=settings,
        client=client,
        sessions=sessions,
        context=context,
        navigator=navigator,
        workouts=WorkoutService(client),
        meals=MealService(client),
    )


@asynccontextmanager
async def open_application(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    store: TokenStore | None = None,
) -> AsyncIterator[Application]:
    """Create, start and finally close an Application."""
    app = create_application(settings, transport=transport, store=store)
    try:
        await app.start()
        yield app
    finally:
        await app.close()
