"""Base class for REST resource services."""

from datetime import date
from typing import Any

from ..clients.api import ApiClient


def format_date(value: date | str | None) -> str | None:
    """Format a date for a query string (YYYY-MM-DD)."""
    if value is None:
        return None
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    return value


class ResourceService:
    """CRUD operations for one backend collection.

    Subclasses set ``resource`` (e.g. ``"workouts"``) and add their
    collection-specific query endpoints. Every method returns the decoded
    response payload as-is and lets errors propagate.
    """

    resource: str = ""

    def __init__(self, client: ApiClient):
        self.client = client

    @property
    def collection_path(self) -> str:
        return f"/{self.resource}/"

    def detail_path(self, record_id: int | str) -> str:
        return f"/{self.resource}/{record_id}/"

    def action_path(self, action: str) -> str:
        return f"/{self.resource}/{action}/"

    async def list(self, params: dict | None = None) -> Any:
        """List records, optionally filtered."""
        return await self.client.get(self.collection_path, params=params or {})

    async def get(self, record_id: int | str) -> Any:
        """Get a single record."""
        return await self.client.get(self.detail_path(record_id))

    async def create(self, data: dict) -> Any:
        """Create a record."""
        return await self.client.post(self.collection_path, json=data)

    async def update(self, record_id: int | str, data: dict) -> Any:
        """Replace a record."""
        return await self.client.put(self.detail_path(record_id), json=data)

    async def patch(self, record_id: int | str, data: dict) -> Any:
        """Partially update a record."""
        return await self.client.patch(self.detail_path(record_id), json=data)

    async def delete(self, record_id: int | str) -> Any:
        """Delete a record."""
        return await self.client.delete(self.detail_path(record_id))

    async def today(self) -> Any:
        return await self.client.get(self.action_path("today"))

    async def yesterday(self) -> Any:
        return await self.client.get(self.action_path("yesterday"))

    async def this_week(self) -> Any:
        return await self.client.get(self.action_path("this_week"))

    async def by_date(self, day: date | str) -> Any:
        return await self.client.get(
            self.action_path("by_date"), params={"date": format_date(day)}
        )

    async def summary(
        self, start_date: date | str | None = None, end_date: date | str | None = None
    ) -> Any:
        """Summary over a date range; only the bounds given are sent."""
        params = {}
        if start_date:
            params["start_date"] = format_date(start_date)
        if end_date:
            params["end_date"] = format_date(end_date)
        return await self.client.get(self.action_path("summary"), params=params)
