"""Base URL resolution from the addresses a server is bound to.

Candidates are filtered by plain string prefix. Only the selected address is
parsed, so malformed entries that are never selected cannot cause failures.
"""

from collections.abc import Sequence
from urllib.parse import urlsplit

from selfrender.core.types import AddressPredicate
from selfrender.errors import InvalidAddressFormat, NoAddressAvailable

HTTPS_DEFAULT_PORT = 443


def is_https(address: str) -> bool:
    return address.startswith("https://")


def is_http(address: str) -> bool:
    return address.startswith("http://")


def _first(addresses: Sequence[str], predicate: AddressPredicate) -> str | None:
    return next((address for address in addresses if predicate(address)), None)


def resolve_base_url(
    addresses: Sequence[str],
    predicate: AddressPredicate | None = None,
) -> str:
    """Pick the canonical base URL from bound addresses.

    Precedence: first match of ``predicate`` (when given), then the first
    https address, then the first http address.

    Args:
        addresses: Bound addresses in the order the host reported them
        predicate: Optional caller-supplied selection predicate

    Returns:
        Selected address with an explicit port 443 removed

    Raises:
        NoAddressAvailable: If no address matches any rule
        InvalidAddressFormat: If the selected address cannot be parsed
    """
    result = None
    if predicate is not None:
        result = _first(addresses, predicate)
    if result is None:
        result = _first(addresses, is_https)
    if result is None:
        result = _first(addresses, is_http)
    if result is None:
        raise NoAddressAvailable(
            f"No http or https address available (candidates: {list(addresses)})"
        )
    return remove_port(result, HTTPS_DEFAULT_PORT)


def resolve_https_url(addresses: Sequence[str]) -> str:
    """Pick the first https address, without falling back to http.

    Raises:
        NoAddressAvailable: If no https address is bound
        InvalidAddressFormat: If the selected address cannot be parsed
    """
    result = _first(addresses, is_https)
    if result is None:
        raise NoAddressAvailable(
            f"No https address available (candidates: {list(addresses)})"
        )
    return remove_port(result, HTTPS_DEFAULT_PORT)


def remove_port(url: str, port: int) -> str:
    """Strip an explicit port from a URL when it equals ``port``.

    The rewritten URL keeps scheme, host, path and query. URLs with any other
    port (or none) are returned unchanged.

    Args:
        url: Absolute URL
        port: Port number to strip

    Returns:
        URL without the port, or the original string

    Raises:
        InvalidAddressFormat: If the URL is not absolute or its port is invalid
    """
    try:
        parts = urlsplit(url)
        url_port = parts.port
    except ValueError as e:
        raise InvalidAddressFormat(url, str(e)) from e
    if not parts.scheme or not parts.hostname:
        raise InvalidAddressFormat(url, "expected scheme://host[:port][/path]")

    if url_port != port:
        return url

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    result = f"{parts.scheme}://{host}{parts.path}"
    if parts.query:
        result += f"?{parts.query}"
    return result
