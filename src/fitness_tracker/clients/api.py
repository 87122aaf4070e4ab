"""HTTP client for the fitness tracker backend."""

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from ..errors import NetworkFailure, Unauthenticated, error_from_response

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@runtime_checkable
class AuthHandler(Protocol):
    """What the client needs from whoever owns the session."""

    @property
    def access_token(self) -> str | None:
        """Return the token to attach, or None when signed out."""
        ...

    async def handle_unauthorized(self, failed_token: str) -> bool:
        """React to a 401 for ``failed_token``.

        Returns:
            True if a usable token is now available and the request
            should be retried once
        """
        ...


class ApiClient:
    """Single request-dispatch object for the backend REST API.

    Attaches the bearer token of the bound auth handler to authenticated
    requests and intercepts 401 responses: the handler gets one chance to
    refresh the token, after which the request is retried exactly once.
    Every other error status is raised as the matching ``ApiError``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={**DEFAULT_HEADERS, **(headers or {})},
            timeout=timeout,
            transport=transport,
        )
        self._auth: AuthHandler | None = None

    def bind_auth(self, handler: AuthHandler | None) -> None:
        """Set the auth handler used for token attachment and 401 handling."""
        self._auth = handler

    @property
    def auth(self) -> AuthHandler | None:
        return self._auth

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict | None = None,
        authenticated: bool = True,
    ) -> Any:
        """Send a request and return the decoded JSON payload.

        Args:
            method: HTTP verb
            path: Path relative to the base URL, e.g. ``/workouts/``
            json: Request body
            params: Query parameters; None values are dropped
            authenticated: Attach the bearer token and intercept 401s

        Returns:
            Decoded JSON body, or None for empty responses

        Raises:
            Unauthenticated: authenticated request without a session
            ApiError: any error response or transport failure
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        token = None
        if authenticated:
            token = self._auth.access_token if self._auth else None
            if not token:
                logger.debug("Rejected %s %s locally: no session", method, path)
                raise Unauthenticated()

        response = await self._send(method, path, json, params, token)

        if response.status_code == 401 and authenticated:
            retry = await self._auth.handle_unauthorized(token)
            new_token = self._auth.access_token if retry else None
            if new_token:
                logger.debug("Retrying %s %s with refreshed token", method, path)
                response = await self._send(method, path, json, params, new_token)

        if response.is_error:
            raise error_from_response(response)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def _send(
        self,
        method: str,
        path: str,
        json: Any,
        params: dict | None,
        token: str | None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await self._http.request(
                method, path, json=json, params=params, headers=headers
            )
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkFailure(f"Unable to reach {self.base_url}: {e}") from e

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return response

    async def get(self, path: str, params: dict | None = None, **kwargs) -> Any:
        return await self.request("GET", path, params=params, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return await self.request("PUT", path, json=json, **kwargs)

    async def patch(self, path: str, json: Any = None, **kwargs) -> Any:
        return await self.request("PATCH", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
