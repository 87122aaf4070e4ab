"""Meal and food item resource service."""

from datetime import date
from typing import Any

from .base import ResourceService, format_date


class MealService(ResourceService):
    """Operations on ``/meals/`` and the read-only ``/food-items/`` catalogue."""

    resource = "meals"
    food_resource = "food-items"

    async def daily_summary(self, start_date: date | str, end_date: date | str) -> Any:
        """Per-day nutrition totals between two dates."""
        return await self.client.get(
            self.action_path("daily_summary"),
            params={
                "start_date": format_date(start_date),
                "end_date": format_date(end_date),
            },
        )

    async def list_food_items(self, params: dict | None = None) -> Any:
        return await self.client.get(f"/{self.food_resource}/", params=params or {})

    async def get_food_item(self, item_id: int | str) -> Any:
        return await self.client.get(f"/{self.food_resource}/{item_id}/")

    async def food_categories(self) -> Any:
        return await self.client.get(f"/{self.food_resource}/categories/")
