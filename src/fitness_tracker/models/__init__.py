"""Data models for fitness-tracker."""

from .forms import LoginForm, RegisterForm
from .session import Session, SessionState
from .user import UserProfile

__all__ = [
    "LoginForm",
    "RegisterForm",
    "Session",
    "SessionState",
    "UserProfile",
]
