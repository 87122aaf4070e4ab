"""Tests for the command-line interface."""

import asyncio
import json

import pytest
from click.testing import CliRunner

from fitness_tracker.auth.storage import MemoryTokenStore
from fitness_tracker.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, settings, backend, store):
    """Invoke the CLI against the fake backend, sharing one token store."""

    def _invoke(*args, **kwargs):
        obj = {"settings": settings, "transport": backend.transport, "store": store}
        return runner.invoke(main, list(args), obj=obj, **kwargs)

    return _invoke


@pytest.fixture
def signed_in(backend, store):
    asyncio.run(store.save(backend.seed_session()))
    return store


class TestAuthCommands:
    """Tests for login, logout, status and profile."""

    def test_version(self, invoke):
        result = invoke("--version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_login(self, invoke, backend, store):
        result = invoke("login", "-e", backend.EMAIL, "-p", backend.PASSWORD)
        assert result.exit_code == 0, result.output
        assert f"Logged in as {backend.EMAIL}" in result.output
        assert asyncio.run(store.load()) is not None

    def test_login_wrong_password(self, invoke, backend, store):
        result = invoke("login", "-e", backend.EMAIL, "-p", "wrong")
        assert result.exit_code == 1
        assert "Invalid email or password" in result.output
        assert asyncio.run(store.load()) is None

    def test_empty_password_is_not_sent(self, invoke, backend):
        """Test empty fields are rejected before any request."""
        result = invoke("login", "-e", backend.EMAIL, "-p", "")
        assert result.exit_code == 1
        assert "password: This field is required." in result.output
        assert backend.requests == []

    def test_status_signed_out(self, invoke, backend):
        result = invoke("status")
        assert result.exit_code == 0
        assert "State:  anonymous" in result.output
        assert backend.requests == []

    def test_status_signed_in(self, invoke, signed_in):
        result = invoke("status")
        assert "State:  authenticated" in result.output
        assert "Refresh token: yes" in result.output

    def test_profile(self, invoke, signed_in):
        result = invoke("profile")
        assert result.exit_code == 0, result.output
        assert "Welcome back, Jane!" in result.output
        assert "Member since: 2024-01-15" in result.output
        assert "Activities:      1" in result.output

    def test_profile_signed_out(self, invoke, backend):
        result = invoke("profile")
        assert result.exit_code == 1
        assert "Not logged in" in result.output
        assert backend.requests == []

    def test_logout(self, invoke, signed_in):
        result = invoke("logout")
        assert result.exit_code == 0
        assert "Logged out" in result.output
        assert asyncio.run(signed_in.load()) is None

    def test_logout_signed_out(self, invoke):
        result = invoke("logout")
        assert result.exit_code == 0
        assert "Not logged in" in result.output


class TestWorkoutCommands:
    """Tests for the workouts group."""

    def test_list_signed_out(self, invoke, backend):
        result = invoke("workouts", "list")
        assert result.exit_code == 1
        assert "Not logged in" in result.output
        assert backend.requests == []

    def test_list(self, invoke, signed_in):
        result = invoke("workouts", "list")
        assert result.exit_code == 0, result.output
        assert "Morning Run" in result.output
        assert "Total: 1 workout(s)" in result.output

    def test_list_json(self, invoke, signed_in):
        result = invoke("workouts", "list", "--scope", "today", "--json")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)[0]["name"] == "Morning Run"

    def test_show(self, invoke, signed_in):
        result = invoke("workouts", "show", "1")
        assert result.exit_code == 0, result.output
        assert "Workout: Morning Run (ID: 1)" in result.output

    def test_show_missing(self, invoke, signed_in):
        result = invoke("workouts", "show", "99")
        assert result.exit_code == 1
        assert "could not be found" in result.output

    def test_create_from_json(self, invoke, signed_in, backend):
        data = json.dumps({"name": "Swim", "workout_type": "cardio", "duration_minutes": "40"})
        result = invoke("workouts", "create", "--data", data)
        assert result.exit_code == 0, result.output
        assert "Workout saved (ID: 2)" in result.output
        assert backend.workouts[2]["duration_minutes"] == 40

    def test_create_field_errors(self, invoke, signed_in):
        result = invoke("workouts", "create", "--data", json.dumps({"notes": "no name"}))
        assert result.exit_code == 1
        assert "name: This field is required." in result.output

    def test_create_bad_json(self, invoke, signed_in, backend):
        result = invoke("workouts", "create", "--data", "[1, 2]")
        assert result.exit_code == 2
        assert backend.requests == []

    def test_edit_patch(self, invoke, signed_in, backend):
        result = invoke("workouts", "edit", "1", "--data", json.dumps({"notes": "felt good"}))
        assert result.exit_code == 0, result.output
        assert backend.workouts[1]["notes"] == "felt good"
        assert backend.workouts[1]["name"] == "Morning Run"
        assert backend.calls("PATCH", "/workouts/1/")

    def test_delete(self, invoke, signed_in, backend):
        result = invoke("workouts", "delete", "1", "--force")
        assert result.exit_code == 0, result.output
        assert backend.workouts == {}

    def test_delete_cancelled(self, invoke, signed_in, backend):
        result = invoke("workouts", "delete", "1", input="n\n")
        assert "Cancelled" in result.output
        assert 1 in backend.workouts

    def test_by_date(self, invoke, signed_in, backend):
        result = invoke("workouts", "by-date", "2024-03-05")
        assert result.exit_code == 0, result.output
        assert "No workouts on 2024-03-05" in result.output
        request = backend.calls("GET", "/workouts/by_date/")[0]
        assert request.url.params["date"] == "2024-03-05"


class TestMealCommands:
    """Tests for the meals and foods groups."""

    def test_list_today(self, invoke, signed_in):
        result = invoke("meals", "list", "--scope", "today")
        assert result.exit_code == 0, result.output
        assert "Oatmeal" in result.output
        assert "Total: 2" in result.output

    def test_list_paginated(self, invoke, signed_in):
        result = invoke("meals", "list")
        assert result.exit_code == 0, result.output
        assert "Apple" in result.output

    def test_daily_summary_needs_range(self, invoke, signed_in):
        result = invoke("meals", "summary", "--daily")
        assert result.exit_code == 2

    def test_foods_signed_out(self, invoke, backend):
        result = invoke("foods", "list")
        assert result.exit_code == 1
        assert backend.requests == []

    def test_expired_session(self, invoke, signed_in, backend):
        """Test a session that cannot be refreshed is reported and cleared."""
        backend.fail_refresh = True
        backend.expire_access_tokens()
        result = invoke("meals", "list")
        assert result.exit_code == 1
        assert "session has expired" in result.output
        assert asyncio.run(signed_in.load()) is None


class TestGlobalOptions:
    """Tests for top-level options."""

    def test_api_url_override(self, runner, backend):
        store = MemoryTokenStore()
        result = runner.invoke(
            main,
            ["--api-url", "http://other.test/api/", "status"],
            obj={"transport": backend.transport, "store": store},
        )
        assert result.exit_code == 0, result.output
        assert "Server: http://other.test/api" in result.output
