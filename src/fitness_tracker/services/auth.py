"""Authentication resource service."""

from typing import Any

from ..clients.api import ApiClient


class AuthService:
    """Operations on ``/auth/``.

    Login, registration and token refresh are sent without a bearer token;
    the profile endpoints require one.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    async def login(self, email: str, password: str) -> Any:
        return await self.client.post(
            "/auth/login/",
            json={"email": email, "password": password},
            authenticated=False,
        )

    async def register(self, details: dict) -> Any:
        return await self.client.post("/auth/register/", json=details, authenticated=False)

    async def refresh(self, refresh_token: str) -> Any:
        return await self.client.post(
            "/auth/token/refresh/",
            json={"refresh": refresh_token},
            authenticated=False,
        )

    async def logout(self, refresh_token: str | None) -> Any:
        return await self.client.post("/auth/logout/", json={"refresh": refresh_token})

    async def get_profile(self) -> Any:
        return await self.client.get("/auth/profile/")

    async def update_profile(self, data: dict) -> Any:
        return await self.client.patch("/auth/profile/", json=data)
