"""Backend and interactive input clients."""

from .api import ApiClient, AuthHandler

__all__ = ["ApiClient", "AuthHandler"]
