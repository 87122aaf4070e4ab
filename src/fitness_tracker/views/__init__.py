"""Front-end independent view models."""

from .auth import LoginView, RegisterView
from .base import View, as_records
from .dashboard import DashboardView, QuickStats
from .messages import describe_error
from .workouts import WorkoutDetailView, WorkoutFormView, WorkoutListView, clean_workout_form

__all__ = [
    "as_records",
    "clean_workout_form",
    "DashboardView",
    "describe_error",
    "LoginView",
    "QuickStats",
    "RegisterView",
    "View",
    "WorkoutDetailView",
    "WorkoutFormView",
    "WorkoutListView",
]
