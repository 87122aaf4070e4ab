"""Meal and food item commands."""

import click

from ..clients.manual import ManualInputClient
from ..errors import ApiError
from ..views import as_records
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

# Meals have no view of their own; they share the dashboard's access rule
MEALS_ROUTE = "/dashboard"

DATE = click.DateTime(formats=["%Y-%m-%d"])


def meal_rows(meals: list[dict]) -> list[list[str]]:
    return [
        [
            str(m.get("id", "")),
            str(m.get("date", "")),
            str(m.get("meal_type", "") or ""),
            truncate(m.get("name", "")),
            str(m.get("total_calories", m.get("calories", "")) or ""),
        ]
        for m in meals
    ]


def print_records(payload, headers: list[str], rows_fn, empty: str, as_json: bool) -> None:
    if as_json:
        echo_json(payload)
        return
    records = as_records(payload)
    if not records:
        echo_info(empty)
        return
    click.echo()
    click.echo(format_table(headers, rows_fn(records)))
    click.echo()
    click.echo(f"Total: {len(records)}")


@click.group()
def meals():
    """Log and review meals."""
    pass


@meals.command(name="list")
@click.option(
    "--scope",
    "-s",
    type=click.Choice(["all", "today", "yesterday", "week"]),
    default="all",
    help="Limit to today, yesterday or this week",
)
@click.option("--date", "day", type=DATE, help="Only meals on this day (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON payload")
@click.pass_context
@async_command
async def list_meals(ctx: click.Context, scope: str, day, as_json: bool):
    """List meals."""
    async with cli_application(ctx) as app:
        ensure_route(ctx, app, MEALS_ROUTE)
        service = app.meals
        try:
            if day is not None:
                payload = await service.by_date(day.date())
            elif scope == "today":
                payload = await service.today()
            elif scope == "yesterday":
                payload = await service.yesterday()
            elif scope == "week":
                payload = await service.this_week()
            else:
                payload = await service.list()
        except ApiError as e:
            fail(ctx, e)

    print_records(
        payload,
        ["ID", "Date", "Meal", "Name", "Calories"],
        meal_rows,
        "No meals found. Log one with 'fitness-tracker meals add'",
        as_json,
    )


@meals.command()
@click.argument("meal_id")
@click.pass_context
@async_command
async def show(ctx: click.Context, meal_id: str):
    """Show a meal as JSON."""
    async with cli_application(ctx) as app:
        ensure_route(ctx, app, MEALS_ROUTE)
        try:
            payload = await app.meals.get(meal_id)
        except ApiError as e:
            fail(ctx, e)
    echo_json(payload)


@meals.command()
@click.option("--data", help="Meal as a JSON object instead of the questionnaire")
@click.pass_context
@async_command
async def add(ctx: click.Context, data: str | None):
    """Log a meal."""
    payload = parse_data_option(ctx, data)

    async with cli_application(ctx) as app:
        ensure_route(ctx, app, MEALS_ROUTE)
        if payload is None:
            payload = await ManualInputClient().collect_meal()
            if payload is None:
                echo_info("Cancelled")
                return
            payload = {k: v for k, v in payload.items() if v not in (None, "")}
        try:
            created = await app.meals.create(payload)
        except ApiError as e:
            fail(ctx, e)

    meal_id = created.get("id", "?") if isinstance(created, dict) else "?"
    echo_success(f"Meal saved (ID: {meal_id})")


@meals.command()
@click.argument("meal_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx: click.Context, meal_id: str, force: bool):
    """Delete a meal."""
    if not force and not click.confirm(f"Delete meal {meal_id}?"):
        echo_info("Cancelled")
        return

    async with cli_application(ctx) as app:
        ensure_route(ctx, app, MEALS_ROUTE)
        try:
            await app.meals.delete(meal_id)
        except ApiError as e:
            fail(ctx, e)

    echo_success(f"Meal {meal_id} deleted")


@meals.command()
@click.option("--start", "start_date", type=DATE, help="First day")
@click.option("--end", "end_date", type=DATE, help="Last day")
@click.option("--daily", is_flag=True, help="Per-day totals (needs --start and --end)")
@click.pass_context
@async_command
async def summary(ctx: click.Context, start_date, end_date, daily: bool):
    """Show nutrition totals over a date range."""
    if daily and (start_date is None or end_date is None):
        raise click.UsageError("--daily needs both --start and --end")

    async with cli_application(ctx) as app:
        ensure_route(ctx, app, MEALS_ROUTE)
        try:
            if daily:
                payload = await app.meals.daily_summary(start_date.date(), end_date.date())
            else:
                payload = await app.meals.summary(
                    start_date.date() if start_date else None,
                    end_date.date() if end_date else None,
                )
        except ApiError as e:
            fail(ctx, e)

    echo_json(payload)


@click.group()
def foods():
    """Browse the food item catalogue."""
    pass


@foods.command(name="list")
@click.option("--search", "-q", help="Search text")
@click.option("--category", "-c", help="Only this category")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON payload")
@click.pass_context
@async_command
async def list_foods(ctx: click.Context, search: str | None, category: str | None, as_json: bool):
    """List food items."""
    params = {"search": search, "category": category}

    async with cli_application(ctx) as app:
        ensure_route(ctx, app, MEALS_ROUTE)
        try:
            payload = await app.meals.list_food_items(params)
        except ApiError as e:
            fail(ctx, e)

    print_records(
        payload,
        ["ID", "Name", "Category", "Calories"],
        lambda items: [
            [
                str(i.get("id", "")),
                truncate(i.get("name", "")),
                str(i.get("category", "") or ""),
                str(i.get("calories", "") or ""),
            ]
            for i in items
        ],
        "No food items found",
        as_json,
    )


@foods.command(name="show")
@click.argument("item_id")
@click.pass_context
@async_command
async def show_food(ctx: click.Context, item_id: str):
    """Show a food item as JSON."""
    async with cli_application(ctx) as app:
        ensure_route(ctx, app, MEALS_ROUTE)
        try:
            payload = await app.meals.get_food_item(item_id)
        except ApiError as e:
            fail(ctx, e)
    echo_json(payload)


@foods.command()
@click.pass_context
@async_command
async def categories(ctx: click.Context):
    """List food categories."""
    async with cli_application(ctx) as app:
        ensure_route(ctx, app, MEALS_ROUTE)
        try:
            payload = await app.meals.food_categories()
        except ApiError as e:
            fail(ctx, e)

    if isinstance(payload, list):
        for category in payload:
            name = category.get("name", category) if isinstance(category, dict) else category
            click.echo(f"  - {name}")
    else:
        echo_json(payload)
