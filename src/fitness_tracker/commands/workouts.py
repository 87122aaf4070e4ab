"""Workout commands."""

import click

from ..clients.manual import ManualInputClient
from ..errors import ApiError
from ..views import WorkoutDetailView, WorkoutFormView, WorkoutListView, as_records
from ..views.workouts import LIST_SCOPES
from .base import (
    async_command,
    cli_application,
    echo_info,
    echo_json,
    echo_success,
    ensure_route,
    fail,
    format_table,
    parse_data_option,
    truncate,
)

HEADERS = ["ID", "Date", "Name", "Type", "Minutes", "Calories"]


def workout_rows(workouts: list[dict]) -> list[list[str]]:
    return [
        [
            str(w.get("id", "")),
            str(w.get("date", "")),
            truncate(w.get("name", "")),
            str(w.get("workout_type", "") or ""),
            str(w.get("duration_minutes", "") or ""),
            str(w.get("calories_burned", "") or ""),
        ]
        for w in workouts
    ]


@click.group()
def workouts():
    """Log, view and edit workouts."""
    pass


@workouts.command(name="list")
@click.option(
    "--scope",
    "-s",
    type=click.Choice(LIST_SCOPES),
    default="all",
    help="Limit to today, yesterday or this week",
)
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON payload")
@click.pass_context
@async_command
async def list_workouts(ctx: click.Context, scope: str, as_json: bool):
    """List workouts."""
    async with cli_application(ctx) as app:
        ensure_route(ctx, app, "/workouts")

        view = WorkoutListView(app).mount()
        try:
            ok = await view.load(scope)
        finally:
            view.unmount()
        if not ok:
            fail(ctx, view.error or "Could not load workouts")

    if as_json:
        echo_json(view.workouts)
        return

    if not view.workouts:
        echo_info("No workouts found. Log one with 'fitness-tracker workouts create'")
        return

    click.echo()
    click.echo(format_table(HEADERS, workout_rows(view.workouts)))
    click.echo()
    click.echo(f"Total: {len(view.workouts)} workout(s)")


@workouts.command()
@click.argument("workout_id")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON payload")
@click.pass_context
@async_command
async def show(ctx: click.Context, workout_id: str, as_json: bool):
    """Show details of a workout."""
    async with cli_application(ctx) as app:
        ensure_route(ctx, app, f"/workouts/{workout_id}")

        view = WorkoutDetailView(app, workout_id).mount()
        try:
            await view.load()
        finally:
            view.unmount()
        if view.workout is None:
            fail(ctx, view.error or f"Workout {workout_id} not found")

    if as_json:
        echo_json(view.workout)
        return

    workout = view.workout
    click.echo()
    click.echo("=" * 50)
    click.echo(f"Workout: {workout.get('name', 'Workout')} (ID: {workout.get('id', workout_id)})")
    click.echo("=" * 50)
    for key, value in workout.items():
        if key in ("id", "name"):
            continue
        label = key.replace("_", " ").capitalize()
        click.echo(f"{label}: {value}")


@workouts.command()
@click.option("--data", help="Workout as a JSON object instead of the questionnaire")
@click.pass_context
@async_command
async def create(ctx: click.Context, data: str | None):
    """Log a new workout."""
    payload = parse_data_option(ctx, data)

    async with cli_application(ctx) as app:
        ensure_route(ctx, app, "/workouts/new")

        if payload is None:
            payload = await ManualInputClient().collect_workout()
            if payload is None:
                echo_info("Cancelled")
                return

        view = WorkoutFormView(app).mount()
        try:
            ok = await view.submit(payload)
        finally:
            view.unmount()
        if not ok:
            fail(ctx, view.error or "Could not save workout", view.field_errors)

    echo_success(f"Workout saved (ID: {(view.saved or {}).get('id', '?')})")


@workouts.command()
@click.argument("workout_id")
@click.option("--data", help="Fields to change as a JSON object instead of the questionnaire")
@click.pass_context
@async_command
async def edit(ctx: click.Context, workout_id: str, data: str | None):
    """Edit a workout.

    With --data only the given fields are changed (partial update);
    otherwise the questionnaire is pre-filled and the full workout replaced.
    """
    changes = parse_data_option(ctx, data)

    async with cli_application(ctx) as app:
        ensure_route(ctx, app, f"/workouts/{workout_id}/edit")

        if changes is not None:
            try:
                await app.workouts.patch(workout_id, changes)
            except ApiError as e:
                fail(ctx, e)
            echo_success(f"Workout {workout_id} updated")
            return

        view = WorkoutFormView(app, workout_id).mount()
        try:
            if not await view.load():
                fail(ctx, view.error or f"Workout {workout_id} not found")

            payload = await ManualInputClient().collect_workout(view.values)
            if payload is None:
                echo_info("Cancelled")
                return

            if not await view.submit(payload):
                fail(ctx, view.error or "Could not save workout", view.field_errors)
        finally:
            view.unmount()

    echo_success(f"Workout {workout_id} updated")


@workouts.command()
@click.argument("workout_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx: click.Context, workout_id: str, force: bool):
    """Delete a workout."""
    async with cli_application(ctx) as app:
        ensure_route(ctx, app, f"/workouts/{workout_id}")

        view = WorkoutDetailView(app, workout_id).mount()
        try:
            if not force:
                if not await view.load():
                    fail(ctx, view.error or f"Workout {workout_id} not found")
                click.echo(f"Workout: {view.workout.get('name', workout_id)}")
                if not click.confirm("Are you sure you want to delete this workout?"):
                    echo_info("Cancelled")
                    return

            if not await view.delete():
                fail(ctx, view.error or "Could not delete workout")
        finally:
            view.unmount()

    echo_success(f"Workout {workout_id} deleted")


@workouts.command(name="by-date")
@click.argument("day", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON payload")
@click.pass_context
@async_command
async def by_date(ctx: click.Context, day, as_json: bool):
    """List workouts on DAY (YYYY-MM-DD)."""
    async with cli_application(ctx) as app:
        ensure_route(ctx, app, "/workouts")
        try:
            payload = await app.workouts.by_date(day.date())
        except ApiError as e:
            fail(ctx, e)

    if as_json:
        echo_json(payload)
        return

    records = as_records(payload)
    if not records:
        echo_info(f"No workouts on {day.date().isoformat()}")
        return
    click.echo(format_table(HEADERS, workout_rows(records)))


@workouts.command()
@click.option("--start", "start_date", type=click.DateTime(formats=["%Y-%m-%d"]), help="First day")
@click.option("--end", "end_date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Last day")
@click.pass_context
@async_command
async def summary(ctx: click.Context, start_date, end_date):
    """Show workout totals over a date range."""
    async with cli_application(ctx) as app:
        ensure_route(ctx, app, "/workouts")
        try:
            payload = await app.workouts.summary(
                start_date.date() if start_date else None,
                end_date.date() if end_date else None,
            )
        except ApiError as e:
            fail(ctx, e)

    echo_json(payload)
