"""Session manager: owns the authentication tokens."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from ..clients.api import ApiClient
from ..errors import ApiError, AuthenticationFailure, Unauthenticated, ValidationFailure
from ..models.forms import LoginForm, RegisterForm
from ..models.session import Session, SessionState
from ..models.user import UserProfile
from ..services.auth import AuthService
from .storage import MemoryTokenStore, TokenStore

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]


def _as_login_form(credentials: LoginForm | Mapping) -> LoginForm:
    if isinstance(credentials, LoginForm):
        return credentials
    return LoginForm(
        email=credentials.get("email", ""),
        password=credentials.get("password", ""),
    )


def _as_register_form(details: RegisterForm | Mapping) -> RegisterForm:
    if isinstance(details, RegisterForm):
        return details
    password = details.get("password", "")
    return RegisterForm(
        username=details.get("username", ""),
        email=details.get("email", ""),
        password=password,
        password_confirm=details.get("password_confirm") or details.get("password2") or password,
        first_name=details.get("first_name", ""),
        last_name=details.get("last_name", ""),
    )


class SessionManager:
    """Single owner of the signed-in session.

    State machine::

        anonymous -> authenticating -> authenticated
        authenticated -(401)-> refreshing -> authenticated | anonymous

    The manager binds itself to the ApiClient as its auth handler, so every
    authenticated request carries the current access token and every 401
    comes back here for one refresh attempt. Consumers observe state changes
    through ``subscribe`` and never touch the tokens directly.
    """

    def __init__(self, client: ApiClient, store: TokenStore | None = None):
        self.client = client
        self.auth_service = AuthService(client)
        self.store: TokenStore = store if store is not None else MemoryTokenStore()
        self._session: Session | None = None
        self._state = SessionState.ANONYMOUS
        self._listeners: list[StateListener] = []
        # Bumped whenever the session is replaced or cleared; a refresh that
        # started under an older generation is discarded
        self._generation = 0
        self._refresh_lock = asyncio.Lock()
        client.bind_auth(self)

    # --- Read-only accessors ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None and self._session.is_authenticated

    @property
    def access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    def current_session(self) -> Session | None:
        """Return the current session without touching the network."""
        return self._session

    # --- Observers ---

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: SessionState) -> None:
        if state == self._state:
            return
        logger.debug("Session state %s -> %s", self._state.value, state.value)
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    # --- Lifecycle ---

    async def initialize(self) -> Session | None:
        """Restore a stored session at start-up."""
        stored = await self.store.load()
        if stored is not None and stored.is_authenticated:
            self._session = stored
            self._set_state(SessionState.AUTHENTICATED)
            logger.info("Restored stored session")
        return self._session

    async def login(self, credentials: LoginForm | Mapping) -> Session:
        """Sign in with email and password.

        Raises:
            ValidationFailure: the form is incomplete (no request is sent)
            AuthenticationFailure: the backend rejected the credentials
        """
        form = _as_login_form(credentials)
        form.ensure_valid()

        async def call() -> Any:
            try:
                return await self.auth_service.login(**form.to_payload())
            except ValidationFailure as e:
                # A 400 without field errors is how many backends say "bad credentials"
                if e.field_errors:
                    raise
                raise AuthenticationFailure(e.message, status=e.status, details=e.details) from e

        return await self._authenticate(call)

    async def register(self, details: RegisterForm | Mapping) -> Session:
        """Create an account and sign in.

        If the registration response carries no tokens, the new account is
        signed in with the submitted email and password.

        Raises:
            ValidationFailure: the form is incomplete or the backend rejected it
        """
        form = _as_register_form(details)
        form.ensure_valid()

        async def call() -> Any:
            payload = await self.auth_service.register(form.to_payload())
            if Session.from_token_response(payload) is not None:
                return payload
            logger.info("Registration returned no tokens, signing in")
            return await self.auth_service.login(**form.credentials.to_payload())

        return await self._authenticate(call)

    async def _authenticate(self, call: Callable[[], Awaitable[Any]]) -> Session:
        self._set_state(SessionState.AUTHENTICATING)
        try:
            payload = await call()
        except ApiError:
            await self._clear()
            raise

        session = Session.from_token_response(payload)
        if session is None:
            await self._clear()
            raise AuthenticationFailure("The server did not return an access token")

        self._generation += 1
        self._session = session
        await self.store.save(session)
        self._set_state(SessionState.AUTHENTICATED)
        logger.info("Signed in")
        return session

    async def logout(self) -> None:
        """Sign out. Stored tokens are always cleared."""
        session = self._session
        if session is not None:
            try:
                await self.auth_service.logout(session.refresh_token)
            except ApiError as e:
                logger.info("Backend logout failed, clearing session anyway: %s", e)
        await self._clear()
        logger.info("Signed out")

    async def _clear(self) -> None:
        self._generation += 1
        self._session = None
        await self.store.clear()
        self._set_state(SessionState.ANONYMOUS)

    # --- Profile ---

    async def get_profile(self) -> UserProfile:
        """Fetch the signed-in user's profile.

        Raises:
            Unauthenticated: there is no session
        """
        if not self.is_authenticated:
            raise Unauthenticated()
        payload = await self.auth_service.get_profile()
        return UserProfile.from_dict(payload or {})

    # --- Token refresh ---

    async def refresh(self) -> bool:
        """Exchange the refresh token for a new access token.

        Returns:
            True on success; on failure the session is cleared
        """
        async with self._refresh_lock:
            return await self._refresh_locked()

    async def handle_unauthorized(self, failed_token: str) -> bool:
        """Called by the ApiClient when a request comes back 401."""
        async with self._refresh_lock:
            if self._session is None:
                return False
            if self._session.access_token != failed_token:
                # Another request already refreshed while this one was in flight
                return True
            return await self._refresh_locked()

    async def _refresh_locked(self) -> bool:
        session = self._session
        if session is None:
            return False

        generation = self._generation
        self._set_state(SessionState.REFRESHING)

        if not session.refresh_token:
            logger.info("Access token rejected and no refresh token available")
            await self._clear()
            return False

        try:
            payload = await self.auth_service.refresh(session.refresh_token)
        except ApiError as e:
            logger.warning("Token refresh failed: %s", e)
            if generation == self._generation:
                await self._clear()
            return False

        if generation != self._generation:
            logger.info("Session ended during token refresh, discarding new token")
            return False

        refreshed = Session.from_token_response(payload)
        if refreshed is None:
            logger.warning("Token refresh response carried no access token")
            await self._clear()
            return False

        self._session = session.with_access_token(
            refreshed.access_token, refreshed.refresh_token
        )
        await self.store.save(self._session)
        if generation != self._generation:
            await self.store.clear()
            return False
        self._set_state(SessionState.AUTHENTICATED)
        logger.info("Access token refreshed")
        return True
