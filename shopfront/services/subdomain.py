"""Resolve a request host to the shop it addresses."""

import logging
from dataclasses import dataclass
from enum import StrEnum

from sqlalchemy.orm import Session

from shopfront.config import get_settings
from shopfront.hosts import get_subdomain
from shopfront.models.shop import Shop
from shopfront.services.shops import find_shop_by_name

logger = logging.getLogger(__name__)


class SubdomainStatus(StrEnum):
    """Outcome of resolving a host."""

    NO_SUBDOMAIN = "no_subdomain"
    SHOP = "shop"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class SubdomainResolution:
    """Result of resolving a host: no subdomain, a shop, or an unknown shop name."""

    status: SubdomainStatus
    name: str | None = None
    shop: Shop | None = None

    @property
    def is_shop(self) -> bool:
        return self.status == SubdomainStatus.SHOP


NO_SUBDOMAIN = SubdomainResolution(SubdomainStatus.NO_SUBDOMAIN)


def resolve_host(db: Session, host: str | None) -> SubdomainResolution:
    """Map a host header to a shop.

    Runs on every request without caching.
    """
    settings = get_settings()
    name = get_subdomain(host, settings.base_domain, settings.reserved_subdomains)
    if name is None:
        return NO_SUBDOMAIN

    shop = find_shop_by_name(db, name)
    if shop is None:
        logger.debug(f"No shop for subdomain '{name}' (host {host})")
        return SubdomainResolution(SubdomainStatus.NOT_FOUND, name=name)
    return SubdomainResolution(SubdomainStatus.SHOP, name=name, shop=shop)
