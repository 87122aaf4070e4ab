"""Workout list, detail and form views."""

from collections.abc import Mapping
from typing import Any

from .base import View, as_records

NUMERIC_FIELDS = ("duration_minutes", "calories_burned")

LIST_SCOPES = ("all", "today", "yesterday", "week")


def clean_workout_form(data: Mapping[str, Any], keep_cleared: bool = False) -> dict:
    """Turn submitted form fields into a workout payload.

    Blank fields are dropped and numeric fields converted; anything else is
    passed through for the backend to validate. With ``keep_cleared`` blank
    fields are sent as None instead, so a full replace clears them.
    """
    payload: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            value = value.strip() or None
        if value is None:
            if keep_cleared:
                payload[key] = None
            continue
        if key in NUMERIC_FIELDS and isinstance(value, str):
            try:
                number = float(value)
            except ValueError:
                payload[key] = value
                continue
            value = int(number) if number.is_integer() else number
        payload[key] = value
    return payload


class WorkoutListView(View):
    """All workouts, or those of today / yesterday / this week."""

    def __init__(self, app):
        super().__init__(app)
        self.workouts: list[dict] = []
        self.scope = "all"

    async def load(self, scope: str = "all", params: dict | None = None) -> bool:
        if scope not in LIST_SCOPES:
            raise ValueError(f"Unknown scope {scope!r}, expected one of {LIST_SCOPES}")
        self.scope = scope

        service = self.app.workouts
        if scope == "today":
            call = service.today()
        elif scope == "yesterday":
            call = service.yesterday()
        elif scope == "week":
            call = service.this_week()
        else:
            call = service.list(params)
        return await self.run(call, self._set_workouts)

    def _set_workouts(self, payload: Any) -> None:
        self.workouts = as_records(payload)


class WorkoutDetailView(View):
    """A single workout."""

    def __init__(self, app, workout_id: int | str):
        super().__init__(app)
        self.workout_id = workout_id
        self.workout: dict | None = None

    async def load(self) -> bool:
        return await self.run(self.app.workouts.get(self.workout_id), self._set_workout)

    def _set_workout(self, payload: Any) -> None:
        self.workout = payload

    async def delete(self) -> bool:
        ok = await self.run(self.app.workouts.delete(self.workout_id))
        if ok:
            self.workout = None
            self.navigate("/workouts")
        return ok


class WorkoutFormView(View):
    """Create a workout, or edit one when ``workout_id`` is given."""

    def __init__(self, app, workout_id: int | str | None = None):
        super().__init__(app)
        self.workout_id = workout_id
        self.values: dict = {}
        self.saved: dict | None = None

    @property
    def is_edit(self) -> bool:
        return self.workout_id is not None

    async def load(self) -> bool:
        """Pre-fill the form when editing."""
        if not self.is_edit:
            return True
        return await self.run(self.app.workouts.get(self.workout_id), self._set_values)

    def _set_values(self, payload: Any) -> None:
        self.values = dict(payload or {})

    async def submit(self, data: Mapping[str, Any]) -> bool:
        payload = clean_workout_form(data, keep_cleared=self.is_edit)
        self.values = {**self.values, **payload}

        if self.is_edit:
            call = self.app.workouts.update(self.workout_id, payload)
        else:
            call = self.app.workouts.create(payload)

        ok = await self.run(call, self._set_saved)
        if ok:
            record_id = (self.saved or {}).get("id", self.workout_id)
            self.navigate(f"/workouts/{record_id}" if record_id is not None else "/workouts")
        return ok

    def _set_saved(self, payload: Any) -> None:
        self.saved = payload if isinstance(payload, dict) else {}
