"""Pytest configuration and fixtures."""

import asyncio
import json
import logging
import re
from datetime import date

import httpx
import pytest

from fitness_tracker.application import create_application
from fitness_tracker.auth.storage import MemoryTokenStore
from fitness_tracker.config import Settings
from fitness_tracker.models.session import Session

API_URL = "http://backend.test/api"

_DETAIL_RE = re.compile(r"^/(workouts|meals)/(\d+)/$")


class FakeBackend:
    """In-process stand-in for the REST backend.

    Issues JWT-style token pairs, rejects unknown bearer tokens with 401 and
    keeps workouts in memory. ``overrides`` maps ``(method, path)`` to a
    handler for one-off responses. Every request is recorded.
    """

    EMAIL = "jane@example.com"
    PASSWORD = "s3cret-pass"

    PROFILE = {
        "id": 7,
        "username": "jane",
        "email": EMAIL,
        "first_name": "Jane",
        "last_name": "Doe",
        "created_at": "2024-01-15T09:30:00Z",
    }

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.overrides: dict = {}
        self.valid_access: set[str] = set()
        self.valid_refresh: set[str] = set()
        self.fail_refresh = False
        self._counter = 0
        today = date.today().isoformat()
        self.workouts: dict[int, dict] = {
            1: {
                "id": 1,
                "name": "Morning Run",
                "workout_type": "cardio",
                "date": today,
                "duration_minutes": 30,
                "calories_burned": 300,
            }
        }
        self.meals: list[dict] = [
            {"id": 1, "name": "Oatmeal", "meal_type": "breakfast", "date": today, "total_calories": 500},
            {"id": 2, "name": "Apple", "meal_type": "snack", "date": today, "calories": 250},
        ]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def issue_tokens(self) -> dict:
        self._counter += 1
        access, refresh = f"access-{self._counter}", f"refresh-{self._counter}"
        self.valid_access.add(access)
        self.valid_refresh.add(refresh)
        return {"access": access, "refresh": refresh}

    def seed_session(self) -> Session:
        """Tokens the backend accepts, as if from an earlier login."""
        tokens = self.issue_tokens()
        return Session(access_token=tokens["access"], refresh_token=tokens["refresh"])

    def expire_access_tokens(self) -> None:
        self.valid_access.clear()

    def calls(self, method: str | None = None, path: str | None = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if (method is None or r.method == method)
            and (path is None or self._path(r) == path)
        ]

    @staticmethod
    def _path(request: httpx.Request) -> str:
        return request.url.path.removeprefix("/api")

    async def handle(self, request: httpx.Request) -> httpx.Response:
        # Yield once so concurrent requests interleave like real I/O
        await asyncio.sleep(0)
        self.requests.append(request)

        method, path = request.method, self._path(request)
        if (method, path) in self.overrides:
            return self.overrides[(method, path)](request)

        body = json.loads(request.content) if request.content else {}

        if (method, path) == ("POST", "/auth/login/"):
            if body.get("email") == self.EMAIL and body.get("password") == self.PASSWORD:
                return httpx.Response(200, json=self.issue_tokens())
            return httpx.Response(
                401, json={"detail": "No active account found with the given credentials"}
            )

        if (method, path) == ("POST", "/auth/register/"):
            user = {k: v for k, v in body.items() if not k.startswith("password")}
            return httpx.Response(201, json={"user": user, "tokens": self.issue_tokens()})

        if (method, path) == ("POST", "/auth/token/refresh/"):
            if self.fail_refresh or body.get("refresh") not in self.valid_refresh:
                return httpx.Response(401, json={"detail": "Token is invalid or expired"})
            self._counter += 1
            access = f"access-{self._counter}"
            self.valid_access.add(access)
            return httpx.Response(200, json={"access": access})

        token = request.headers.get("Authorization", "").removeprefix("Bearer ")
        if token not in self.valid_access:
            return httpx.Response(401, json={"detail": "Given token not valid for any token type"})

        if (method, path) == ("POST", "/auth/logout/"):
            self.valid_refresh.discard(body.get("refresh"))
            return httpx.Response(204)
        if (method, path) == ("GET", "/auth/profile/"):
            return httpx.Response(200, json=self.PROFILE)

        return self._records(method, path, body)

    def _records(self, method: str, path: str, body: dict) -> httpx.Response:
        today = date.today().isoformat()

        if path == "/workouts/":
            if method == "GET":
                return httpx.Response(200, json=list(self.workouts.values()))
            if not body.get("name"):
                return httpx.Response(400, json={"name": ["This field is required."]})
            workout_id = max(self.workouts, default=0) + 1
            self.workouts[workout_id] = {"id": workout_id, **body}
            return httpx.Response(201, json=self.workouts[workout_id])

        if path == "/workouts/today/":
            return httpx.Response(
                200, json=[w for w in self.workouts.values() if w.get("date") == today]
            )
        if path.rsplit("/", 2)[-2] in ("yesterday", "this_week", "by_date"):
            return httpx.Response(200, json=[])
        if path == "/meals/today/":
            return httpx.Response(200, json=[m for m in self.meals if m.get("date") == today])
        if path == "/meals/":
            return httpx.Response(200, json={"count": len(self.meals), "results": self.meals})

        match = _DETAIL_RE.match(path)
        if match and match.group(1) == "workouts":
            workout_id = int(match.group(2))
            if workout_id not in self.workouts:
                return httpx.Response(404, json={"detail": "Not found."})
            if method == "GET":
                return httpx.Response(200, json=self.workouts[workout_id])
            if method == "DELETE":
                del self.workouts[workout_id]
                return httpx.Response(204)
            if method == "PUT":
                self.workouts[workout_id] = {"id": workout_id, **body}
            else:
                self.workouts[workout_id].update(body)
            return httpx.Response(200, json=self.workouts[workout_id])

        return httpx.Response(404, json={"detail": "Not found."})


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so they do not outlive the test."""
    yield
    logger = logging.getLogger("fitness_tracker")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def backend():
    """A fresh fake backend."""
    return FakeBackend()


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at the fake backend, with tokens kept in memory."""
    return Settings(
        api_base_url=API_URL,
        data_dir=tmp_path,
        token_storage="memory",
        request_timeout=5.0,
    )


@pytest.fixture
def store():
    """An empty in-memory token store."""
    return MemoryTokenStore()


@pytest.fixture
def make_app(settings, backend, store):
    """Factory for a client core wired to the fake backend.

    The returned app is not started; call ``await app.start()`` inside the
    test's event loop.
    """

    def factory(**overrides):
        return create_application(
            overrides.get("settings", settings),
            transport=overrides.get("transport", backend.transport),
            store=overrides.get("store", store),
        )

    return factory
