"""REST resource services."""

from .auth import AuthService
from .base import ResourceService
from .meals import MealService
from .workouts import WorkoutService

__all__ = [
    "AuthService",
    "MealService",
    "ResourceService",
    "WorkoutService",
]
