"""Workout resource service."""

from .base import ResourceService


class WorkoutService(ResourceService):
    """Operations on ``/workouts/``.

    CRUD plus the ``today``, ``yesterday``, ``this_week``, ``by_date`` and
    ``summary`` queries inherited from ResourceService.
    """

    resource = "workouts"
