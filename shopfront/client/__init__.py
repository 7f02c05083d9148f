"""Python client for the Shopfront API: auth state, token relay and shop pages."""

from shopfront.client.api import ApiError, ShopfrontClient
from shopfront.client.controller import AuthController, AuthResult, AuthState, AuthStatus
from shopfront.client.relay import (
    BridgeReply,
    CrossOriginTokenRelay,
    InProcessBridgeChannel,
    PageLocation,
    TokenBridge,
)
from shopfront.client.shop_context import PageKind, ShopContext, resolve_shop_context
from shopfront.client.token_store import FileTokenStore, MemoryTokenStore, TokenStore

__all__ = [
    "ApiError",
    "ShopfrontClient",
    "AuthController",
    "AuthResult",
    "AuthState",
    "AuthStatus",
    "BridgeReply",
    "CrossOriginTokenRelay",
    "InProcessBridgeChannel",
    "PageLocation",
    "TokenBridge",
    "PageKind",
    "ShopContext",
    "resolve_shop_context",
    "FileTokenStore",
    "MemoryTokenStore",
    "TokenStore",
]
