"""Configuration management for selfrender.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Self

CONFIG_FILENAME = "selfrender.toml"


@dataclass
class ServerConfig:
    """Server binding configuration."""

    host: str = "127.0.0.1"
    port: int = 8080
    addresses: list[str] = field(default_factory=list)
    ssl_certfile: Path | None = None
    ssl_keyfile: Path | None = None
    ssl_port: int = 8443


@dataclass
class AuthConfig:
    """Email token configuration."""

    hash_salt: str = ""
    protected_prefixes: list[str] = field(default_factory=list)


@dataclass
class RenderConfig:
    """Page render client configuration."""

    timeout: float = 30.0
    prefer_https: bool = True


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    auth: AuthConfig
    render: RenderConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for selfrender.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Self:
        return cls(
            server=ServerConfig(),
            auth=AuthConfig(),
            render=RenderConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server"), config_dir),
            auth=cls._parse_auth(data.get("auth")),
            render=cls._parse_render(data.get("render")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object, config_dir: Path) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int):
            raise ValueError("server.port must be an integer")

        addresses = _parse_string_list(data.get("addresses", []), "server.addresses")

        ssl_certfile = data.get("ssl_certfile")
        if ssl_certfile is not None and not isinstance(ssl_certfile, str):
            raise ValueError("server.ssl_certfile must be a string")

        ssl_keyfile = data.get("ssl_keyfile")
        if ssl_keyfile is not None and not isinstance(ssl_keyfile, str):
            raise ValueError("server.ssl_keyfile must be a string")

        if ssl_certfile is not None and ssl_keyfile is None:
            raise ValueError("server.ssl_keyfile is required with server.ssl_certfile")

        ssl_port = data.get("ssl_port", 8443)
        if not isinstance(ssl_port, int):
            raise ValueError("server.ssl_port must be an integer")

        return ServerConfig(
            host=host,
            port=port,
            addresses=addresses,
            ssl_certfile=config_dir / ssl_certfile if ssl_certfile else None,
            ssl_keyfile=config_dir / ssl_keyfile if ssl_keyfile else None,
            ssl_port=ssl_port,
        )

    @classmethod
    def _parse_auth(cls, data: object) -> AuthConfig:
        """Parse auth configuration section.

        A missing or empty hash_salt is valid and yields an empty salt.
        """
        if data is None:
            return AuthConfig()

        if not isinstance(data, dict):
            raise ValueError("auth section must be a dictionary")

        hash_salt = data.get("hash_salt", "")
        if not isinstance(hash_salt, str):
            raise ValueError("auth.hash_salt must be a string")

        protected_prefixes = _parse_string_list(
            data.get("protected_prefixes", []),
            "auth.protected_prefixes",
        )

        return AuthConfig(hash_salt=hash_salt, protected_prefixes=protected_prefixes)

    @classmethod
    def _parse_render(cls, data: object) -> RenderConfig:
        if data is None:
            return RenderConfig()

        if not isinstance(data, dict):
            raise ValueError("render section must be a dictionary")

        timeout = data.get("timeout", 30.0)
        # bool is an int subclass
        if isinstance(timeout, bool) or not isinstance(timeout, int | float):
            raise ValueError("render.timeout must be a number")

        prefer_https = data.get("prefer_https", True)
        if not isinstance(prefer_https, bool):
            raise ValueError("render.prefer_https must be a boolean")

        return RenderConfig(timeout=float(timeout), prefer_https=prefer_https)

    def with_overrides(
        self,
        *,
        addresses: list[str] | None = None,
        hash_salt: str | None = None,
        timeout: float | None = None,
    ) -> Self:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            addresses: Override server.addresses
            hash_salt: Override auth.hash_salt
            timeout: Override render.timeout

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if addresses is not None:
            server = replace(self.server, addresses=list(addresses))

        auth = self.auth
        if hash_salt is not None:
            auth = replace(self.auth, hash_salt=hash_salt)

        render = self.render
        if timeout is not None:
            render = replace(self.render, timeout=timeout)

        return replace(self, server=server, auth=auth, render=render)


def _parse_string_list(raw: object, name: str) -> list[str]:
    if not isinstance(raw, list):
        raise ValueError(f"{name} must be a list")
    items: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            raise ValueError(f"{name} items must be strings")
        items.append(item)
    return items
