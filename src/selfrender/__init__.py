"""selfrender - resolve this server's URL and fetch its rendered pages."""

from selfrender.client import PageRenderClient
from selfrender.core.addresses import AddressSource, SiteAddressSource, StaticAddressSource
from selfrender.core.resolver import remove_port, resolve_base_url, resolve_https_url
from selfrender.core.tokens import EMAIL_TOKEN_HEADER, build_email_token, verify_email_token
from selfrender.core.urls import combine
from selfrender.errors import (
    InvalidAddressFormat,
    NoAddressAvailable,
    ResolutionError,
    TransportError,
)
from selfrender.transport import HttpTransport, HttpxTransport

__all__ = [
    "EMAIL_TOKEN_HEADER",
    "AddressSource",
    "HttpTransport",
    "HttpxTransport",
    "InvalidAddressFormat",
    "NoAddressAvailable",
    "PageRenderClient",
    "ResolutionError",
    "SiteAddressSource",
    "StaticAddressSource",
    "TransportError",
    "build_email_token",
    "combine",
    "remove_port",
    "resolve_base_url",
    "resolve_https_url",
    "verify_email_token",
]
