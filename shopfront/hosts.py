"""Host and URL helpers for moving between the main domain and shop subdomains."""

import ipaddress
from collections.abc import Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_RESERVED = ("www", "api", "admin")
TOKEN_PARAM = "token"


def get_subdomain(
    host: str | None,
    base_domain: str = "localhost",
    reserved: Iterable[str] = DEFAULT_RESERVED,
) -> str | None:
    """Return the shop label of a host, or None when it has no shop subdomain.

    ``coffee-shop.localhost:3000`` -> ``coffee-shop``;
    ``localhost:3000`` and ``www.localhost:3000`` -> None.

    The label is taken from the original host, so shop lookups stay
    case-sensitive even though the domain comparison is not.
    """
    if not host or host.strip().startswith("["):
        # Missing host or an IPv6 literal
        return None

    hostname = host.strip().rsplit(":", 1)[0]
    try:
        ipaddress.ip_address(hostname)
        return None
    except ValueError:
        pass
    base = base_domain.lower().strip(".")
    lowered = hostname.lower()

    if lowered == base:
        return None
    if lowered.endswith("." + base):
        prefix = hostname[: -(len(base) + 1)]
    else:
        # Foreign host (for example a custom production domain): shop.example.com
        parts = hostname.split(".")
        if len(parts) < 3:
            return None
        prefix = ".".join(parts[:-2])

    label = prefix.split(".")[0]
    if not label or label.lower() in {name.lower() for name in reserved}:
        return None
    return label


def with_token_param(url: str, token: str) -> str:
    """Append the session token as a query parameter (login redirect into a shop)."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != TOKEN_PARAM]
    query.append((TOKEN_PARAM, token))
    return urlunsplit(parts._replace(query=urlencode(query)))


def pop_token_param(url: str) -> tuple[str | None, str]:
    """Split a token query parameter off a URL.

    Returns the token (or None) and the URL without it.
    """
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    token = next((v for k, v in query if k == TOKEN_PARAM and v), None)
    remaining = [(k, v) for k, v in query if k != TOKEN_PARAM]
    return token, urlunsplit(parts._replace(query=urlencode(remaining)))


def build_shop_url(
    shop_name: str,
    base_host: str = "localhost:3000",
    scheme: str = "http",
    token: str | None = None,
) -> str:
    """Build the subdomain URL of a shop, optionally carrying the session token."""
    url = f"{scheme}://{shop_name}.{base_host}/"
    return with_token_param(url, token) if token else url


def build_signin_url(main_origin: str, return_url: str) -> str:
    """Build the main-domain sign-in URL that redirects back to ``return_url``.

    Any token already on the return URL is dropped so it is never bounced
    through the sign-in page.
    """
    _, clean_return = pop_token_param(return_url)
    return f"{main_origin.rstrip('/')}/signin?{urlencode({'redirect': clean_return})}"
