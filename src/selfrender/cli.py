"""CLI interface for selfrender.

Command-line tool for resolving server URLs, deriving email tokens and
fetching rendered pages.
"""

import asyncio
import logging
import sys
from pathlib import Path

import click

from selfrender.client import PageRenderClient
from selfrender.config import Config
from selfrender.core.addresses import StaticAddressSource
from selfrender.core.resolver import is_http, resolve_base_url, resolve_https_url
from selfrender.core.tokens import build_email_token
from selfrender.core.types import AddressPredicate
from selfrender.core.urls import combine
from selfrender.transport import HttpxTransport

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover selfrender.toml)",
)
address_option = click.option(
    "--address",
    "-a",
    "addresses",
    multiple=True,
    help="Bound server URL, repeatable (overrides server.addresses)",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)


@click.group()
def cli() -> None:
    """Resolve this server's URL and render its pages to strings."""


@cli.command()
@config_option
@address_option
@click.option("--https", "https_only", is_flag=True, help="Require an https address")
@verbose_option
def resolve(
    config_path: Path | None,
    addresses: tuple[str, ...],
    https_only: bool,
    verbose: bool,
) -> None:
    """Print the resolved base URL."""
    _setup_logging(verbose)
    try:
        config = _load_config(config_path, addresses=addresses)
        if https_only:
            click.echo(resolve_https_url(config.server.addresses))
        else:
            click.echo(resolve_base_url(config.server.addresses, _predicate(config)))
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument("path")
@config_option
@address_option
@verbose_option
def url(
    path: str,
    config_path: Path | None,
    addresses: tuple[str, ...],
    verbose: bool,
) -> None:
    """Print the absolute URL of PATH on this server."""
    _setup_logging(verbose)
    try:
        config = _load_config(config_path, addresses=addresses)
        base_url = resolve_base_url(config.server.addresses, _predicate(config))
        click.echo(combine(base_url, path))
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument("path")
@config_option
@click.option("--salt", default=None, help="Hash salt (overrides auth.hash_salt)")
@verbose_option
def token(path: str, config_path: Path | None, salt: str | None, verbose: bool) -> None:
    """Print the email token for PATH."""
    _setup_logging(verbose)
    try:
        config = _load_config(config_path, hash_salt=salt)
        click.echo(build_email_token(config.auth.hash_salt, path))
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument("path")
@config_option
@address_option
@click.option("--salt", default=None, help="Hash salt (overrides auth.hash_salt)")
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Request timeout in seconds (overrides render.timeout)",
)
@verbose_option
def render(
    path: str,
    config_path: Path | None,
    addresses: tuple[str, ...],
    salt: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Fetch the rendered page at PATH and print it."""
    _setup_logging(verbose)
    try:
        config = _load_config(
            config_path,
            addresses=addresses,
            hash_salt=salt,
            timeout=timeout,
        )
        click.echo(asyncio.run(_render(config, path)))
    except Exception as e:
        _fail(e)


async def _render(config: Config, path: str) -> str:
    async with HttpxTransport.create(config.render.timeout) as transport:
        client = PageRenderClient(
            StaticAddressSource(config.server.addresses),
            transport,
            hash_salt=config.auth.hash_salt,
            predicate=_predicate(config),
        )
        return await client.render_page(path)


def _load_config(
    config_path: Path | None,
    *,
    addresses: tuple[str, ...] = (),
    hash_salt: str | None = None,
    timeout: float | None = None,
) -> Config:
    """Load config and apply command-line overrides.

    Args:
        config_path: Explicit config file, or None to auto-discover
        addresses: --address values; empty keeps server.addresses
        hash_salt: --salt value
        timeout: --timeout value

    Returns:
        Effective configuration
    """
    config = Config.load(config_path)
    return config.with_overrides(
        addresses=list(addresses) if addresses else None,
        hash_salt=hash_salt,
        timeout=timeout,
    )


def _predicate(config: Config) -> AddressPredicate | None:
    return None if config.render.prefer_https else is_http


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(error: Exception) -> None:
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
