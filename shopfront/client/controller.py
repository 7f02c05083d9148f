"""
Client-side authentication state.

``AuthController`` is the only writer of the auth state. Everything else reads
immutable ``AuthState`` snapshots, either through ``controller.state`` or by
subscribing to changes.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from urllib.parse import urlsplit

from shopfront import policy
from shopfront.client.api import ApiError, ShopfrontClient
from shopfront.client.relay import CrossOriginTokenRelay, PageLocation
from shopfront.client.token_store import TokenStore
from shopfront.hosts import DEFAULT_RESERVED, get_subdomain
from shopfront.schemas.user import UserWithShops

logger = logging.getLogger(__name__)


class AuthStatus(StrEnum):
    """Where the client is in the authentication flow."""

    UNKNOWN = "unknown"
    CHECKING = "checking"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class AuthState:
    """Read-only snapshot of the client's authentication."""

    status: AuthStatus = AuthStatus.UNKNOWN
    user: UserWithShops | None = None
    errors: tuple[str, ...] = ()

    @property
    def is_authenticated(self) -> bool:
        return self.status == AuthStatus.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        return self.status in (AuthStatus.UNKNOWN, AuthStatus.CHECKING)


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a login or signup attempt."""

    success: bool
    errors: list[str] = field(default_factory=list)


Listener = Callable[[AuthState], None]


class AuthController:
    """Drive login, signup, logout and session restore for one page."""

    def __init__(
        self,
        api: ShopfrontClient,
        store: TokenStore,
        relay: CrossOriginTokenRelay | None = None,
        base_domain: str = "localhost",
        reserved_subdomains: tuple[str, ...] = DEFAULT_RESERVED,
    ) -> None:
        self.api = api
        self.store = store
        self.relay = relay
        self.base_domain = base_domain
        self.reserved_subdomains = reserved_subdomains
        self._state = AuthState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AuthState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` on every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _set_state(
        self,
        status: AuthStatus,
        user: UserWithShops | None = None,
        errors: list[str] | tuple[str, ...] = (),
    ) -> None:
        self._state = AuthState(status=status, user=user, errors=tuple(errors))
        logger.debug(f"Auth state -> {status}")
        for listener in list(self._listeners):
            listener(self._state)

    def _adopt_token(self, token: str) -> None:
        self.api.set_token(token)
        self.store.set(token)

    def _forget_token(self) -> None:
        self.api.clear_session()
        self.store.clear()

    def is_subdomain(self, location: PageLocation) -> bool:
        host = urlsplit(location.href).netloc
        return get_subdomain(host, self.base_domain, self.reserved_subdomains) is not None

    async def _fetch_current_user(self) -> bool:
        """Resolve the session to a user and settle the state accordingly."""
        try:
            user = await self.api.get_current_user()
        except ApiError as e:
            if e.is_unauthorized:
                logger.info("Session rejected by the server, clearing stored token")
                self._forget_token()
            self._set_state(AuthStatus.UNAUTHENTICATED)
            return False

        self._set_state(AuthStatus.AUTHENTICATED, user=user)
        return True

    async def initialize(self, location: PageLocation) -> AuthState:
        """Restore the session for the page at ``location``.

        Looks for a token in the store, then (on a shop subdomain) through the
        relay, and finally falls back to the session cookie.
        """
        self._set_state(AuthStatus.CHECKING)

        token = self.store.get()
        if not token and self.relay is not None and self.is_subdomain(location):
            logger.info("No token on subdomain, attempting cross-domain token retrieval")
            token = await self.relay.obtain(location)

        if token:
            self._adopt_token(token)
        else:
            logger.debug("No stored token found, checking cookie-based auth")

        await self._fetch_current_user()
        return self._state

    async def login(self, username: str, password: str, remember_me: bool = False) -> AuthResult:
        self._set_state(AuthStatus.CHECKING)
        try:
            response = await self.api.login(username, password, remember_me)
        except ApiError as e:
            self._set_state(AuthStatus.UNAUTHENTICATED, errors=e.messages)
            return AuthResult(success=False, errors=e.messages)

        self._adopt_token(response.token)
        self._set_state(AuthStatus.AUTHENTICATED, user=response.user)
        logger.info(f"Logged in as {response.user.username} ({len(response.user.shops)} shops)")
        return AuthResult(success=True)

    async def signup(self, username: str, password: str, shop_names: list[str]) -> AuthResult:
        """Register a new account. Does not log in."""
        errors = policy.validate_signup(username, password, shop_names)
        if errors:
            return AuthResult(success=False, errors=errors)

        try:
            await self.api.signup(username, password, shop_names)
        except ApiError as e:
            return AuthResult(success=False, errors=e.messages)
        return AuthResult(success=True)

    async def logout(self) -> None:
        """Log out. Local state is cleared even if the server cannot be reached."""
        try:
            await self.api.logout()
        except ApiError as e:
            logger.warning(f"Logout request failed: {e}")
        finally:
            self._forget_token()
            self._set_state(AuthStatus.UNAUTHENTICATED)

    async def refresh_user(self) -> AuthState:
        await self._fetch_current_user()
        return self._state
