"""Shared CLI utilities."""

import asyncio
import json
from contextlib import asynccontextmanager
from functools import wraps
from typing import Any, AsyncIterator

import click

from ..application import Application, open_application
from ..auth.guard import LOGIN_PATH
from ..config import Settings, get_settings
from ..errors import ApiError
from ..views.messages import describe_error, field_messages


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_cli_settings(ctx: click.Context) -> Settings:
    """Get the settings chosen by the top-level options."""
    obj = ctx.find_root().obj or {}
    return obj.get("settings") or get_settings()


@asynccontextmanager
async def cli_application(ctx: click.Context) -> AsyncIterator[Application]:
    """Open the client core for one command.

    Tests can pass ``transport`` and ``store`` through ``ctx.obj``.
    """
    obj = ctx.find_root().obj or {}
    async with open_application(
        get_cli_settings(ctx),
        transport=obj.get("transport"),
        store=obj.get("store"),
    ) as app:
        yield app


def ensure_route(ctx: click.Context, app: Application, path: str) -> None:
    """Run ``path`` through the route guard; exit if it sends us to login."""
    landed = app.navigator.navigate(path)
    if landed == LOGIN_PATH and path != LOGIN_PATH:
        echo_error("Not logged in. Run 'fitness-tracker login' first.")
        ctx.exit(1)


def fail(ctx: click.Context, error: ApiError | str, field_errors: dict | None = None) -> None:
    """Print an error (and any field errors) and exit with status 1."""
    if isinstance(error, ApiError):
        field_errors = field_errors or field_messages(error)
        error = describe_error(error)
    echo_error(error)
    for field, message in (field_errors or {}).items():
        click.echo(f"  {field}: {message}")
    ctx.exit(1)


def parse_data_option(ctx: click.Context, data: str | None) -> dict | None:
    """Parse a ``--data`` JSON object, or return None when not given."""
    if data is None:
        return None
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", ctx=ctx, param_hint="--data")
    if not isinstance(payload, dict):
        raise click.BadParameter("must be a JSON object", ctx=ctx, param_hint="--data")
    return payload


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def echo_json(payload: Any) -> None:
    """Print a payload as indented JSON."""
    click.echo(json.dumps(payload, indent=2, default=str))


def truncate(value: Any, width: int = 30) -> str:
    text = "" if value is None else str(value)
    return text[:width] + "..." if len(text) > width else text


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = []
    lines.append("".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)).rstrip())
    lines.append("".join("-" * w + " " * padding for w in widths).rstrip())
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)).rstrip()
        )

    return "\n".join(lines)
