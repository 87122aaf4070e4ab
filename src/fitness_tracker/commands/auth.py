"""Account commands: login, register, logout, profile, status."""

import click

from ..auth.guard import HOME_PATH
from ..clients.manual import ManualInputClient
from ..models.forms import LoginForm
from ..views import DashboardView, LoginView, RegisterView
from .base import (
    async_command,
    cli_application,
    echo_info,
    echo_success,
    ensure_route,
    fail,
)


@click.command()
@click.option("--email", "-e", help="Account email address")
@click.option("--password", "-p", help="Password (prompted for when omitted)")
@click.pass_context
@async_command
async def login(ctx: click.Context, email: str | None, password: str | None):
    """Log in to the fitness tracker backend.

    Missing values are asked for interactively. Empty fields are rejected
    before anything is sent to the server.
    """
    if password is None:
        form = await ManualInputClient().collect_login(email)
        if form is None:
            echo_info("Cancelled")
            return
    else:
        form = LoginForm(email=email or "", password=password)

    async with cli_application(ctx) as app:
        view = LoginView(app).mount()
        try:
            if not await view.submit(form):
                fail(ctx, view.error or "Login failed", view.field_errors)
        finally:
            view.unmount()

        echo_success(f"Logged in as {form.email}")


@click.command()
@click.pass_context
@async_command
async def register(ctx: click.Context):
    """Create an account interactively and log in."""
    form = await ManualInputClient().collect_registration()
    if form is None:
        echo_info("Cancelled")
        return

    async with cli_application(ctx) as app:
        view = RegisterView(app).mount()
        try:
            if not await view.submit(form):
                fail(ctx, view.error or "Registration failed", view.field_errors)
        finally:
            view.unmount()

        echo_success(f"Account {form.username} created and logged in")


@click.command()
@click.pass_context
@async_command
async def logout(ctx: click.Context):
    """Log out and forget the stored tokens."""
    async with cli_application(ctx) as app:
        was_authenticated = app.context.is_authenticated
        await app.sessions.logout()

    if was_authenticated:
        echo_success("Logged out")
    else:
        echo_info("Not logged in")


@click.command()
@click.pass_context
@async_command
async def profile(ctx: click.Context):
    """Show your profile and today's stats (the dashboard)."""
    async with cli_application(ctx) as app:
        ensure_route(ctx, app, HOME_PATH)

        view = DashboardView(app).mount()
        try:
            await view.load()
        finally:
            view.unmount()

        if view.profile is None:
            fail(ctx, view.error or "Could not load your profile")

        user = view.profile
        click.echo()
        click.echo(click.style(f"Welcome back, {user.first_name or user.username}!", bold=True))
        click.echo("=" * 50)
        click.echo(f"Name:         {user.display_name}")
        click.echo(f"Email:        {user.email}")
        click.echo(f"Username:     {user.username}")
        click.echo(f"Member since: {user.member_since}")

        if view.stats is not None:
            click.echo()
            click.echo(click.style("Today:", bold=True))
            click.echo(f"  Activities:      {view.stats.activities}")
            click.echo(f"  Calories burned: {view.stats.calories_burned:.0f}")
            click.echo(f"  Meals logged:    {view.stats.meals}")
            click.echo(f"  Calories eaten:  {view.stats.calories_eaten:.0f}")
        elif view.error:
            click.echo()
            echo_info(f"Stats unavailable: {view.error}")


@click.command()
@click.pass_context
@async_command
async def status(ctx: click.Context):
    """Show whether a session is stored (no network call)."""
    async with cli_application(ctx) as app:
        session = app.sessions.current_session()
        click.echo(f"Server: {app.settings.api_base_url}")
        click.echo(f"State:  {app.sessions.state.value}")
        if session is not None:
            click.echo(f"Refresh token: {'yes' if session.refresh_token else 'no'}")
