"""Shared test fixtures."""

from pathlib import Path

import pytest
from selfrender.config import AuthConfig, Config, RenderConfig, ServerConfig


@pytest.fixture
def test_config() -> Config:
    """Create a test configuration with a salt and one protected prefix."""
    return Config(
        server=ServerConfig(),
        auth=AuthConfig(hash_salt="test-salt", protected_prefixes=["/emails"]),
        render=RenderConfig(timeout=5.0),
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path for a selfrender.toml inside tmp_path (not yet written)."""
    return tmp_path / "selfrender.toml"
