"""Tests for the resource services."""

import asyncio
from datetime import date

import httpx
import pytest

from fitness_tracker.clients.api import ApiClient
from fitness_tracker.services import AuthService, MealService, WorkoutService
from fitness_tracker.services.base import format_date


class Recorder:
    """Transport that answers every request with an empty list."""

    def __init__(self):
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, json=[])

    @property
    def last(self):
        request = self.requests[-1]
        return request.method, request.url.path, dict(request.url.params)


class Token:
    access_token = "token"

    async def handle_unauthorized(self, failed_token):
        return False


@pytest.fixture
def recorder():
    return Recorder()


def call(recorder, service_cls, fn):
    """Run ``fn(service)`` against a recording transport."""

    async def main():
        client = ApiClient("http://backend.test/api", transport=httpx.MockTransport(recorder))
        client.bind_auth(Token())
        async with client:
            return await fn(service_cls(client))

    return asyncio.run(main())


class TestFormatDate:
    """Tests for query string dates."""

    def test_date(self):
        assert format_date(date(2024, 3, 5)) == "2024-03-05"

    def test_passthrough(self):
        assert format_date("2024-03-05") == "2024-03-05"
        assert format_date(None) is None


class TestWorkoutService:
    """Tests for WorkoutService endpoints."""

    def test_crud_paths(self, recorder):
        """Test CRUD operations hit the collection and detail paths."""

        async def crud(service):
            await service.list()
            await service.get(4)
            await service.create({"name": "Swim"})
            await service.update(4, {"name": "Swim"})
            await service.patch(4, {"notes": "cold"})
            await service.delete(4)

        call(recorder, WorkoutService, crud)

        assert [(r.method, r.url.path) for r in recorder.requests] == [
            ("GET", "/api/workouts/"),
            ("GET", "/api/workouts/4/"),
            ("POST", "/api/workouts/"),
            ("PUT", "/api/workouts/4/"),
            ("PATCH", "/api/workouts/4/"),
            ("DELETE", "/api/workouts/4/"),
        ]

    @pytest.mark.parametrize(
        "method,path",
        [
            ("today", "/api/workouts/today/"),
            ("yesterday", "/api/workouts/yesterday/"),
            ("this_week", "/api/workouts/this_week/"),
        ],
    )
    def test_relative_day_endpoints(self, recorder, method, path):
        """Test today/yesterday/this_week endpoints."""
        call(recorder, WorkoutService, lambda s: getattr(s, method)())
        assert recorder.last == ("GET", path, {})

    def test_by_date(self, recorder):
        """Test by_date sends the day as YYYY-MM-DD."""
        call(recorder, WorkoutService, lambda s: s.by_date(date(2024, 3, 5)))
        assert recorder.last == ("GET", "/api/workouts/by_date/", {"date": "2024-03-05"})

    def test_summary_sends_only_given_bounds(self, recorder):
        """Test summary omits missing bounds."""
        call(recorder, WorkoutService, lambda s: s.summary(start_date=date(2024, 3, 1)))
        assert recorder.last == ("GET", "/api/workouts/summary/", {"start_date": "2024-03-01"})

        call(recorder, WorkoutService, lambda s: s.summary())
        assert recorder.last == ("GET", "/api/workouts/summary/", {})


class TestMealService:
    """Tests for MealService endpoints."""

    def test_daily_summary(self, recorder):
        """Test daily_summary sends both bounds."""
        call(recorder, MealService, lambda s: s.daily_summary("2024-03-01", date(2024, 3, 7)))
        assert recorder.last == (
            "GET",
            "/api/meals/daily_summary/",
            {"start_date": "2024-03-01", "end_date": "2024-03-07"},
        )

    def test_food_items(self, recorder):
        """Test the food item catalogue endpoints."""

        async def foods(service):
            await service.list_food_items({"search": "egg", "category": None})
            await service.get_food_item(12)
            await service.food_categories()

        call(recorder, MealService, foods)

        assert [(r.url.path, dict(r.url.params)) for r in recorder.requests] == [
            ("/api/food-items/", {"search": "egg"}),
            ("/api/food-items/12/", {}),
            ("/api/food-items/categories/", {}),
        ]


class TestAuthService:
    """Tests for AuthService endpoints."""

    def test_login_is_sent_without_token(self, recorder):
        """Test login does not carry a bearer token."""
        call(recorder, AuthService, lambda s: s.login("a@b.c", "pw"))
        request = recorder.requests[-1]
        assert request.url.path == "/api/auth/login/"
        assert "Authorization" not in request.headers

    def test_profile_is_sent_with_token(self, recorder):
        """Test profile requests carry the bearer token."""
        call(recorder, AuthService, lambda s: s.update_profile({"first_name": "J"}))
        request = recorder.requests[-1]
        assert (request.method, request.url.path) == ("PATCH", "/api/auth/profile/")
        assert request.headers["Authorization"] == "Bearer token"
