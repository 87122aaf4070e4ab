"""FastAPI application for the fitness-tracker web interface."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..application import Application, create_application
from ..auth.guard import normalize_path
from ..auth.storage import TokenStore
from ..config import Settings, get_settings
from .routers import auth, dashboard, workouts

logger = logging.getLogger(__name__)

# Template and static file paths
TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

# Paths the route guard does not handle
UNGUARDED_PREFIXES = ("/static", "/health", "/logout")


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    store: TokenStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the process-wide settings)
        transport: Optional httpx transport for the backend client
        store: Optional token store override
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start the client core on startup, close it on shutdown."""
        core = create_application(settings, transport=transport, store=store)
        await core.start()
        app.state.core = core
        yield
        await core.close()

    app = FastAPI(
        title="fitness-tracker",
        description="Fitness Tracker web client",
        version=__version__,
        lifespan=lifespan,
    )

    # Mount static files
    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    # Store templates in app state for use in routers
    app.state.templates = Jinja2Templates(directory=TEMPLATES_DIR)

    @app.middleware("http")
    async def route_guard(request: Request, call_next):
        """Redirect navigation the route guard does not allow."""
        path = request.url.path
        if path.startswith(UNGUARDED_PREFIXES):
            return await call_next(request)

        core: Application = request.app.state.core
        if request.method == "GET":
            landed = core.navigator.navigate(path)
            if landed != normalize_path(path):
                return RedirectResponse(url=landed, status_code=303)
        else:
            redirect = core.navigator.guard.check(path, core.context.is_authenticated)
            if redirect is not None:
                return RedirectResponse(url=redirect, status_code=303)
        return await call_next(request)

    # Include routers
    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(workouts.router)

    @app.get("/health")
    async def health(request: Request):
        """Health check endpoint."""
        core: Application = request.app.state.core
        return {
            "status": "healthy",
            "version": __version__,
            "authenticated": core.context.is_authenticated,
        }

    return app
