"""Middleware serving shop subdomains."""

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shopfront.config import get_settings
from shopfront.database import get_db
from shopfront.errors import NotFoundError
from shopfront.hosts import get_subdomain
from shopfront.schemas.shop import ShopLanding
from shopfront.services.subdomain import SubdomainStatus, resolve_host

logger = logging.getLogger(__name__)


async def shop_subdomain_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Answer requests addressed to a shop subdomain.

    ``coffee-shop.localhost:3000`` gets the shop landing body, an unknown shop
    gets 404 and any other host falls through to the main app.
    """
    settings = get_settings()
    host = request.headers.get("host")
    if get_subdomain(host, settings.base_domain, settings.reserved_subdomains) is None:
        return await call_next(request)

    # Same session provider the routes use, so dependency overrides apply here too
    provider = request.app.dependency_overrides.get(get_db, get_db)
    sessions = provider()
    db = next(sessions)
    try:
        resolution = resolve_host(db, host)
        shop_name = resolution.shop.name if resolution.shop is not None else None
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Shop lookup for host {host} failed: {e}")
        return await call_next(request)
    finally:
        sessions.close()

    if resolution.status == SubdomainStatus.NOT_FOUND:
        error = NotFoundError(f"Shop '{resolution.name}' not found")
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=error.to_dict())

    logger.debug(f"Serving shop subdomain '{shop_name}'")
    landing = ShopLanding(message=f"This is {shop_name} shop", shop_name=shop_name)
    return JSONResponse(content=landing.model_dump(by_alias=True))
