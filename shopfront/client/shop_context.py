"""Decide what a page should show for the host it was served from."""

import logging
from dataclasses import dataclass
from enum import StrEnum

from shopfront.client.api import ApiError, ShopfrontClient
from shopfront.client.controller import AuthState
from shopfront.hosts import DEFAULT_RESERVED, get_subdomain
from shopfront.schemas.shop import ShopResponse

logger = logging.getLogger(__name__)


class PageKind(StrEnum):
    """Which view a host maps to."""

    MAIN_APP = "main_app"
    SHOP = "shop"
    SHOP_NOT_FOUND = "shop_not_found"


@dataclass(frozen=True)
class ShopContext:
    """The view for a host, with the shop and ownership when on a shop subdomain."""

    kind: PageKind
    subdomain: str | None = None
    shop: ShopResponse | None = None
    is_owner: bool = False
    authenticated: bool = False

    @property
    def requires_sign_in(self) -> bool:
        return self.kind == PageKind.SHOP and not self.authenticated


async def resolve_shop_context(
    api: ShopfrontClient,
    host: str,
    auth: AuthState,
    base_domain: str = "localhost",
    reserved: tuple[str, ...] = DEFAULT_RESERVED,
) -> ShopContext:
    """Map a host to the main app, a shop page or a "shop not found" page.

    Ownership is taken from the user's current shop list, which the auth
    controller re-fetches from the server.
    """
    subdomain = get_subdomain(host, base_domain, reserved)
    if subdomain is None:
        return ShopContext(PageKind.MAIN_APP)

    try:
        shop = await api.get_shop_by_name(subdomain)
    except ApiError as e:
        logger.info(f"Subdomain is not a valid shop: {subdomain} ({e})")
        return ShopContext(PageKind.SHOP_NOT_FOUND, subdomain=subdomain)

    is_owner = auth.user is not None and auth.user.owns(shop.name)
    return ShopContext(
        PageKind.SHOP,
        subdomain=subdomain,
        shop=shop,
        is_owner=is_owner,
        authenticated=auth.is_authenticated,
    )

