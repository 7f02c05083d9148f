"""Async HTTP client for the Shopfront API."""

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from shopfront.schemas.auth import LoginResponse, SignupResponse
from shopfront.schemas.shop import ShopResponse
from shopfront.schemas.user import UserWithShops

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "An unexpected error occurred. Please try again."

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiError(Exception):
    """A failed API call.

    ``status_code`` is None when the request never got a response (network
    failure, timeout).
    """

    def __init__(self, messages: list[str], status_code: int | None = None):
        super().__init__("; ".join(messages))
        self.messages = messages
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


def error_messages(response: httpx.Response) -> list[str]:
    """Extract the human-readable messages from an error response body.

    ``message`` may be a single string or a list of strings.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    message = body.get("message") if isinstance(body, dict) else None
    if isinstance(message, list) and message:
        return [str(item) for item in message]
    if message:
        return [str(message)]
    return [f"Request failed with status {response.status_code}"]


def parse_body(model: type[ModelT], data: Any, message: str) -> ModelT:
    """Validate a successful response body, turning a mismatch into ``ApiError``."""
    try:
        return model.model_validate(data)
    except SchemaError as e:
        logger.error(f"{message}: {e}")
        raise ApiError([message]) from e


class ShopfrontClient:
    """Client for the authentication, user and shop endpoints.

    Keeps a cookie jar, so the session cookie set at login is sent on later
    requests, and an optional bearer token.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    @property
    def token(self) -> str | None:
        header = self._client.headers.get("Authorization")
        return header.removeprefix("Bearer ") if header else None

    def set_token(self, token: str | None) -> None:
        """Attach (or with None, detach) the bearer token for later requests."""
        if token:
            self._client.headers["Authorization"] = f"Bearer {token}"
        else:
            self._client.headers.pop("Authorization", None)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        logger.debug(f"API request: {method} {url}")
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"API request {method} {url} failed: {e}")
            raise ApiError([str(e) or DEFAULT_ERROR]) from e

        if response.is_error:
            messages = error_messages(response)
            logger.warning(f"API error {response.status_code} on {method} {url}: {messages}")
            raise ApiError(messages, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"API response to {method} {url} is not JSON: {e}")
            raise ApiError(["Invalid response from server"], response.status_code) from e

    async def signup(self, username: str, password: str, shop_names: list[str]) -> SignupResponse:
        data = await self._request(
            "POST",
            "/auth/signup",
            json={"username": username, "password": password, "shopNames": shop_names},
        )
        return parse_body(SignupResponse, data, "Invalid signup response")

    async def login(self, username: str, password: str, remember_me: bool = False) -> LoginResponse:
        data = await self._request(
            "POST",
            "/auth/login",
            json={"username": username, "password": password, "rememberMe": remember_me},
        )
        return parse_body(LoginResponse, data, "Invalid login response")

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout")

    def clear_session(self) -> None:
        """Forget the bearer token and any session cookie held locally."""
        self.set_token(None)
        self._client.cookies.clear()

    async def get_current_user(self) -> UserWithShops:
        data = await self._request("GET", "/users/me")
        return parse_body(UserWithShops, data, "No user data in response")

    async def get_shop_by_name(self, shop_name: str) -> ShopResponse:
        data = await self._request("GET", f"/shops/by-name/{quote(shop_name, safe='')}")
        return parse_body(ShopResponse, data, "Invalid shop response")

    async def get_shop_by_id(self, shop_id: str) -> ShopResponse:
        data = await self._request("GET", f"/shops/{quote(shop_id, safe='')}")
        return parse_body(ShopResponse, data, "Invalid shop response")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ShopfrontClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
