"""aiohttp integration for selfrender.

Wires a page render client into an application, checks email tokens on
protected routes and starts sites whose addresses feed URL resolution.
"""

import logging
import ssl
from collections.abc import Awaitable, Callable

from aiohttp import web

from selfrender.app_keys import (
    address_source_key,
    config_key,
    render_client_key,
    transport_key,
)
from selfrender.client import PageRenderClient
from selfrender.config import Config
from selfrender.core.addresses import SiteAddressSource
from selfrender.core.resolver import is_http
from selfrender.core.tokens import EMAIL_TOKEN_HEADER, verify_email_token
from selfrender.transport import HttpxTransport

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def create_app(config: Config) -> web.Application:
    """Create aiohttp application with a render client attached.

    Routes are registered by the caller before the app is started. The shared
    httpx transport is created here and closed on app cleanup.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    middlewares = [email_token_middleware] if config.auth.protected_prefixes else []
    app = web.Application(middlewares=middlewares)

    addresses = SiteAddressSource()
    transport = HttpxTransport.create(config.render.timeout)

    app[config_key] = config
    app[address_source_key] = addresses
    app[transport_key] = transport
    app[render_client_key] = PageRenderClient(
        addresses,
        transport,
        hash_salt=config.auth.hash_salt,
        predicate=None if config.render.prefer_https else is_http,
    )

    app.on_cleanup.append(_close_transport)

    return app


async def _close_transport(app: web.Application) -> None:
    await app[transport_key].aclose()


@web.middleware
async def email_token_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Reject requests to protected paths without a valid email token."""
    auth = request.app[config_key].auth
    path = request.path

    if not any(path.startswith(prefix) for prefix in auth.protected_prefixes):
        return await handler(request)

    token = request.headers.get(EMAIL_TOKEN_HEADER)
    if token is None or not _token_matches(request, auth.hash_salt, token):
        logger.warning(f"Rejected request to {path}: invalid email token")
        return web.json_response(
            {"error": "Invalid email token", "path": path},
            status=403,
        )

    return await handler(request)


def _token_matches(request: web.Request, salt: str, token: str) -> bool:
    # Tokens are derived from the path the caller passed, which may be
    # relative with or without a leading slash, or a full URL
    path_qs = request.path_qs
    candidates = (path_qs, path_qs.lstrip("/"), str(request.url))
    return any(verify_email_token(salt, candidate, token) for candidate in candidates)


async def start_server(app: web.Application) -> web.AppRunner:
    """Start http (and optionally https) sites for the application.

    Each started site is registered with the app's address source in start
    order, so the http site is always reported first.

    Args:
        app: Application created by create_app()

    Returns:
        Runner to clean up when the server stops
    """
    server = app[config_key].server
    addresses = app[address_source_key]

    runner = web.AppRunner(app)
    await runner.setup()

    http_site = web.TCPSite(runner, server.host, server.port)
    await http_site.start()
    addresses.add(http_site)

    if server.ssl_certfile is not None:
        ssl_context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
        ssl_context.load_cert_chain(server.ssl_certfile, server.ssl_keyfile)
        https_site = web.TCPSite(runner, server.host, server.ssl_port, ssl_context=ssl_context)
        await https_site.start()
        addresses.add(https_site)

    logger.info(f"Serving on {', '.join(addresses.get_addresses())}")
    return runner
