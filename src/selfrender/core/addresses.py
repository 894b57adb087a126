"""Sources of the addresses a server is bound to."""

from collections.abc import Iterable, Sequence
from typing import Protocol

from aiohttp import web


class AddressSource(Protocol):
    """Reports bound addresses as full URLs, in bind order."""

    def get_addresses(self) -> Sequence[str]: ...


class StaticAddressSource:
    """Fixed list of addresses (from configuration or the command line)."""

    def __init__(self, addresses: Iterable[str] = ()):
        self._addresses = list(addresses)

    def get_addresses(self) -> Sequence[str]:
        return list(self._addresses)


class SiteAddressSource:
    """Addresses of started aiohttp sites.

    Sites are reported in the order they were added. Each site's ``name`` is
    its URL, e.g. "http://127.0.0.1:8080" or "https://0.0.0.0:8443".
    """

    def __init__(self) -> None:
        self._sites: list[web.BaseSite] = []

    def add(self, site: web.BaseSite) -> None:
        self._sites.append(site)

    def get_addresses(self) -> Sequence[str]:
        return [site.name for site in self._sites]
