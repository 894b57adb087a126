"""Application keys for type-safe app configuration access."""

from aiohttp import web

from selfrender.client import PageRenderClient
from selfrender.config import Config
from selfrender.core.addresses import SiteAddressSource
from selfrender.transport import HttpxTransport

config_key = web.AppKey("config", Config)
address_source_key = web.AppKey("address_source", SiteAddressSource)
render_client_key = web.AppKey("render_client", PageRenderClient)
transport_key = web.AppKey("transport", HttpxTransport)
