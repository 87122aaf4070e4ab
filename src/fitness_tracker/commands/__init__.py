"""CLI commands for fitness-tracker."""

from .auth import login, logout, profile, register, status
from .meals import foods, meals
from .serve import serve
from .workouts import workouts

__all__ = [
    "foods",
    "login",
    "logout",
    "meals",
    "profile",
    "register",
    "serve",
    "status",
    "workouts",
]
