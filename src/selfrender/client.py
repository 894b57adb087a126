"""Client for fetching rendered pages from the running server.

Resolves the server's own base URL from its bound addresses, builds the
request URL and attaches a path-bound email token header.
"""

import logging

from selfrender.core.addresses import AddressSource
from selfrender.core.resolver import resolve_base_url, resolve_https_url
from selfrender.core.tokens import EMAIL_TOKEN_HEADER, build_email_token
from selfrender.core.types import AddressPredicate
from selfrender.core.urls import combine, is_absolute
from selfrender.transport import HttpTransport

logger = logging.getLogger(__name__)


class PageRenderClient:
    """Fetches rendered pages of this application as strings."""

    def __init__(
        self,
        addresses: AddressSource,
        transport: HttpTransport,
        *,
        hash_salt: str = "",
        predicate: AddressPredicate | None = None,
    ):
        """Initialize render client.

        Args:
            addresses: Source of the server's bound addresses
            transport: HTTP transport used for GET requests (closed by its owner)
            hash_salt: Salt for email token derivation
            predicate: Default address predicate for base URL resolution
        """
        self.addresses = addresses
        self.transport = transport
        self.hash_salt = hash_salt
        self.predicate = predicate

    def base_url(self, predicate: AddressPredicate | None = None) -> str:
        """Resolve the base URL (predicate, then https, then http)."""
        return resolve_base_url(
            self.addresses.get_addresses(),
            predicate if predicate is not None else self.predicate,
        )

    def https_url(self) -> str:
        """Resolve the https base URL, failing if none is bound."""
        return resolve_https_url(self.addresses.get_addresses())

    def build_url(self, path: str, predicate: AddressPredicate | None = None) -> str:
        """Build an absolute URL to a resource in this application."""
        return combine(self.base_url(predicate), path)

    def email_token(self, path: str) -> str:
        return build_email_token(self.hash_salt, path)

    async def render_page(self, path: str) -> str:
        """Fetch the rendered page at ``path``.

        A path starting with "http" is used verbatim; anything else is joined
        to the resolved base URL. The email token is always derived from
        ``path`` as given, not from the final URL.

        Args:
            path: Relative resource path or absolute URL

        Returns:
            Response body

        Raises:
            ResolutionError: If no base URL can be resolved
            TransportError: If the request fails
        """
        url = path if is_absolute(path) else self.build_url(path)

        logger.debug(f"Rendering page: {url}")

        headers = {EMAIL_TOKEN_HEADER: self.email_token(path)}
        return await self.transport.get_string(url, headers)
