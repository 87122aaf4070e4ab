"""Web server command."""

import click

from .base import get_cli_settings


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8080, type=int, help="Port to bind to (default: 8080)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the web interface.

    The web UI talks to the backend configured with --api-url or
    FITNESS_TRACKER_API_BASE_URL. It keeps one signed-in session for the
    whole server, so bind it to localhost unless you know otherwise.

    Examples:

        # Start on the default port (8080)
        fitness-tracker serve

        # Point at another backend
        fitness-tracker --api-url https://fit.example.com/api serve

        # Development mode with auto-reload (settings come from the environment)
        fitness-tracker serve --reload
    """
    import uvicorn

    from ..web import create_app

    settings = get_cli_settings(ctx)

    click.echo()
    click.echo(click.style("Starting fitness-tracker web interface...", fg="green"))
    click.echo()
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo(f"  Backend: {settings.api_base_url}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    if reload:
        uvicorn.run(
            "fitness_tracker.web:create_app",
            host=host,
            port=port,
            reload=True,
            factory=True,
        )
        return

    uvicorn.run(create_app(settings), host=host, port=port)
