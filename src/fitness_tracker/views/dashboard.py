"""Dashboard view."""

from dataclasses import dataclass

from ..auth.guard import LOGIN_PATH
from ..models.user import UserProfile
from .base import View, as_records


@dataclass
class QuickStats:
    """Today's numbers shown under the profile."""

    activities: int = 0
    calories_burned: float = 0
    meals: int = 0
    calories_eaten: float = 0


def _total(records: list[dict], *keys: str) -> float:
    total = 0.0
    for record in records:
        for key in keys:
            value = record.get(key)
            if isinstance(value, (int, float)):
                total += value
                break
    return total


class DashboardView(View):
    """Profile card plus today's quick stats."""

    def __init__(self, app):
        super().__init__(app)
        self.profile: UserProfile | None = None
        self.stats: QuickStats | None = None

    async def load(self) -> bool:
        """Fetch the profile, then today's workouts and meals."""
        ok = await self.run(self.app.sessions.get_profile(), self._set_profile)
        if ok:
            await self.run(self._fetch_stats(), self._set_stats)
        return ok

    async def _fetch_stats(self) -> QuickStats:
        workouts = as_records(await self.app.workouts.today())
        meals = as_records(await self.app.meals.today())
        return QuickStats(
            activities=len(workouts),
            calories_burned=_total(workouts, "calories_burned", "calories"),
            meals=len(meals),
            calories_eaten=_total(meals, "total_calories", "calories"),
        )

    def _set_profile(self, profile: UserProfile) -> None:
        self.profile = profile

    def _set_stats(self, stats: QuickStats) -> None:
        self.stats = stats

    async def logout(self) -> str:
        """Sign out and go to the login view."""
        await self.app.sessions.logout()
        self.profile = None
        self.stats = None
        return self.navigate(LOGIN_PATH)
