"""Exceptions raised while resolving addresses and fetching pages."""


class ResolutionError(ValueError):
    """Base URL could not be resolved from the bound addresses."""


class NoAddressAvailable(ResolutionError):
    """No bound address matches the required scheme or predicate."""


class InvalidAddressFormat(ResolutionError):
    """The selected address cannot be parsed as a URL."""

    def __init__(self, address: str, reason: str):
        super().__init__(f"Invalid address {address!r}: {reason}")
        self.address = address


class TransportError(Exception):
    """HTTP request failed (network error or non-success status)."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
