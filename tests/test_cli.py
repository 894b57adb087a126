"""Tests for CLI commands."""

from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner
from selfrender.cli import cli
from selfrender.core.tokens import build_email_token


class TestResolveCommand:
    """Tests for the resolve command."""

    def test__addresses_option__prints_https_base(self, config_file: Path) -> None:
        """Resolve from --address values."""
        config_file.write_text("")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "resolve",
                "-c",
                str(config_file),
                "-a",
                "http://localhost:5000",
                "-a",
                "https://localhost:443",
            ],
        )

        assert result.exit_code == 0
        assert result.output.strip() == "https://localhost"

    def test__config_addresses__used(self, config_file: Path) -> None:
        """Resolve from server.addresses."""
        config_file.write_text('[server]\naddresses = ["http://127.0.0.1:8080"]')

        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "-c", str(config_file)])

        assert result.exit_code == 0
        assert result.output.strip() == "http://127.0.0.1:8080"

    def test__prefer_https_false__prints_http(self, config_file: Path) -> None:
        """Honor render.prefer_https = false."""
        config_file.write_text(
            '[server]\naddresses = ["https://h", "http://h:8080"]\n'
            "[render]\nprefer_https = false"
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "-c", str(config_file)])

        assert result.exit_code == 0
        assert result.output.strip() == "http://h:8080"

    def test__https_required_but_missing__fails(self, config_file: Path) -> None:
        """Exit with error when --https finds no https address."""
        config_file.write_text("")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["resolve", "--https", "-c", str(config_file), "-a", "http://h"],
        )

        assert result.exit_code == 1
        assert "Error: No https address available" in result.output

    def test__no_addresses__fails(self, config_file: Path) -> None:
        """Exit with error when nothing is bound."""
        config_file.write_text("")

        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestUrlCommand:
    """Tests for the url command."""

    def test__path__printed_as_absolute_url(self, config_file: Path) -> None:
        """Join the resolved base URL and the path."""
        config_file.write_text('[server]\naddresses = ["https://example.com/"]')

        runner = CliRunner()
        result = runner.invoke(cli, ["url", "/emails/welcome", "-c", str(config_file)])

        assert result.exit_code == 0
        assert result.output.strip() == "https://example.com/emails/welcome"


class TestTokenCommand:
    """Tests for the token command."""

    def test__config_salt__used(self, config_file: Path) -> None:
        """Derive the token with auth.hash_salt."""
        config_file.write_text('[auth]\nhash_salt = "pepper"')

        runner = CliRunner()
        result = runner.invoke(cli, ["token", "/emails/a", "-c", str(config_file)])

        assert result.exit_code == 0
        assert result.output.strip() == build_email_token("pepper", "/emails/a")

    def test__salt_option__overrides_config(self, config_file: Path) -> None:
        """Prefer --salt over the config value."""
        config_file.write_text('[auth]\nhash_salt = "pepper"')

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["token", "/emails/a", "-c", str(config_file), "--salt", ""],
        )

        assert result.exit_code == 0
        assert result.output.strip() == build_email_token("", "/emails/a")

    def test__verbose_flag__accepted(self, config_file: Path) -> None:
        """Accept -v like the other commands."""
        config_file.write_text("")

        runner = CliRunner()
        result = runner.invoke(cli, ["token", "/a", "-c", str(config_file), "-v"])

        assert result.exit_code == 0
        assert result.output.strip() == build_email_token("", "/a")

    def test__invalid_config__fails(self, config_file: Path) -> None:
        """Report configuration errors."""
        config_file.write_text("[auth]\nhash_salt = 1")

        runner = CliRunner()
        result = runner.invoke(cli, ["token", "/a", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "auth.hash_salt must be a string" in result.output


class TestRenderCommand:
    """Tests for the render command."""

    def test__page__printed(self, config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Print the fetched body."""
        config_file.write_text('[auth]\nhash_salt = "s"')
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="<p>rendered</p>")

        _patch_httpx(monkeypatch, handler)

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["render", "/emails/a", "-c", str(config_file), "-a", "https://h:443"],
        )

        assert result.exit_code == 0
        assert result.output.strip() == "<p>rendered</p>"
        assert str(seen[0].url) == "https://h/emails/a"
        assert seen[0].headers["email-token"] == build_email_token("s", "/emails/a")

    def test__http_error__fails(
        self,
        config_file: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Exit with error on non-success status."""
        config_file.write_text("")
        _patch_httpx(monkeypatch, lambda request: httpx.Response(500, text="boom"))

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["render", "http://external/page", "-c", str(config_file)],
        )

        assert result.exit_code == 1
        assert "failed with status 500" in result.output


def _patch_httpx(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    """Route every new httpx.AsyncClient through a MockTransport."""
    original = httpx.AsyncClient

    def factory(**kwargs) -> httpx.AsyncClient:
        return original(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", factory)
