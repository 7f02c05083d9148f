"""
Cross-origin token relay.

A page served from a shop subdomain cannot read the token the main domain
stored. The relay tries two ways of getting it, in order:

1. a ``token`` query parameter put on the URL by the main-domain login
   redirect, consumed once and stripped from the location;
2. a bridge document on the main domain, asked for its token over an
   asynchronous request/response channel.

Every failure (timeout, channel error, unexpected origin, malformed reply)
degrades to "no token"; nothing is raised to the caller.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from shopfront.client.token_store import TokenStore
from shopfront.config import get_settings
from shopfront.hosts import pop_token_param

logger = logging.getLogger(__name__)

GET_TOKEN = "GET_TOKEN"
TOKEN_RESPONSE = "TOKEN_RESPONSE"
DEFAULT_TIMEOUT = 5.0


@dataclass
class PageLocation:
    """The address of the current page; ``replace`` rewrites it in place."""

    href: str

    def replace(self, href: str) -> None:
        self.href = href


@dataclass(frozen=True)
class BridgeReply:
    """A message received from the bridge, tagged with the sender's origin."""

    origin: str
    data: Any


class BridgeChannel(Protocol):
    """Request/response channel to the main-domain token bridge."""

    async def request(self, message: dict[str, Any]) -> BridgeReply: ...


class TokenBridge:
    """Main-domain side of the relay: answers token requests from its own store."""

    def __init__(self, store: TokenStore, origin: str) -> None:
        self.store = store
        self.origin = origin

    def handle(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """Reply to a bridge message; unknown messages get no reply."""
        if message.get("type") != GET_TOKEN:
            return None
        return {"type": TOKEN_RESPONSE, "token": self.store.get()}


class InProcessBridgeChannel:
    """Channel connected directly to a TokenBridge in the same process."""

    def __init__(self, bridge: TokenBridge) -> None:
        self.bridge = bridge

    async def request(self, message: dict[str, Any]) -> BridgeReply:
        # Replies are delivered asynchronously, like a posted message
        await asyncio.sleep(0)
        reply = self.bridge.handle(message)
        if reply is None:
            # Never answered; the relay's timeout decides when to give up
            await asyncio.Event().wait()
        return BridgeReply(origin=self.bridge.origin, data=reply)


class CrossOriginTokenRelay:
    """Obtain the main-domain session token from a shop subdomain page."""

    def __init__(
        self,
        channel: BridgeChannel | None,
        allowed_origins: Iterable[str],
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.channel = channel
        self.allowed_origins = frozenset(allowed_origins)
        self.timeout = timeout

    @classmethod
    def from_settings(cls, channel: BridgeChannel | None) -> "CrossOriginTokenRelay":
        """Relay trusting the configured main-site origin, with the configured timeout."""
        settings = get_settings()
        return cls(channel, [settings.main_origin], timeout=settings.relay_timeout_seconds)

    def take_url_token(self, location: PageLocation) -> str | None:
        """Consume a token carried on the URL, stripping it from the location."""
        token, clean_href = pop_token_param(location.href)
        if token:
            logger.info("Found session token in URL parameters")
            location.replace(clean_href)
        return token

    async def request_bridge_token(self) -> str | None:
        """Ask the main-domain bridge for its token, waiting at most ``timeout`` seconds."""
        if self.channel is None:
            return None

        try:
            reply = await asyncio.wait_for(
                self.channel.request({"type": GET_TOKEN}), timeout=self.timeout
            )
        except TimeoutError:
            logger.warning(f"Token bridge did not answer within {self.timeout}s")
            return None
        except Exception as e:
            logger.warning(f"Token bridge request failed: {e}")
            return None

        if not isinstance(reply, BridgeReply):
            logger.warning(f"Token bridge channel returned {reply!r}, expected a reply")
            return None
        if reply.origin not in self.allowed_origins:
            logger.warning(f"Ignoring token bridge reply from untrusted origin {reply.origin}")
            return None
        if not isinstance(reply.data, dict) or reply.data.get("type") != TOKEN_RESPONSE:
            logger.warning(f"Unexpected token bridge reply: {reply.data!r}")
            return None

        token = reply.data.get("token")
        return token if isinstance(token, str) and token else None

    async def obtain(self, location: PageLocation) -> str | None:
        """Try the URL parameter, then the bridge. Returns None when neither has a token."""
        token = self.take_url_token(location)
        if token:
            return token
        return await self.request_bridge_token()
