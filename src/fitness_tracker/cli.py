"""CLI entry point for fitness-tracker."""

import click

from . import __version__
from .commands import foods, login, logout, meals, profile, register, serve, status, workouts
from .config import get_settings
from .logging_config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="fitness-tracker")
@click.option("--api-url", envvar="FITNESS_TRACKER_API_BASE_URL", help="Backend API base URL")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log verbosity (default: WARNING)",
)
@click.option("--json-logs", is_flag=True, default=None, help="Emit logs as JSON lines")
@click.pass_context
def main(ctx: click.Context, api_url: str | None, log_level: str | None, json_logs: bool | None):
    """fitness-tracker: log workouts and meals against your fitness backend.

    Sign in once and the session is remembered between commands; expired
    access tokens are refreshed automatically.

    Example usage:

        # Sign in (prompts for anything missing)
        fitness-tracker login -e you@example.com

        # See today's dashboard
        fitness-tracker profile

        # Log and review workouts
        fitness-tracker workouts create
        fitness-tracker workouts list --scope week

        # Start the web interface
        fitness-tracker serve
    """
    obj = ctx.ensure_object(dict)

    updates = {}
    if api_url:
        updates["api_base_url"] = api_url.rstrip("/")
    if log_level:
        updates["log_level"] = log_level.upper()
    if json_logs:
        updates["log_json"] = True

    settings = obj.get("settings") or get_settings()
    if updates:
        settings = settings.model_copy(update=updates)
    obj["settings"] = settings

    configure_logging(settings.log_level, settings.log_json)


# Register commands
main.add_command(login)
main.add_command(register)
main.add_command(logout)
main.add_command(profile)
main.add_command(status)
main.add_command(workouts)
main.add_command(meals)
main.add_command(foods)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
