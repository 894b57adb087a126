"""Tests for URL joining."""

import pytest
from selfrender.core.urls import combine, is_absolute


class TestCombine:
    """Tests for combine()."""

    @pytest.mark.parametrize(
        ("base_url", "path"),
        [
            ("https://h/", "/a"),
            ("https://h", "a"),
            ("https://h/", "a"),
            ("https://h", "/a"),
        ],
    )
    def test__slash_variants__single_separator(self, base_url: str, path: str) -> None:
        """Produce exactly one slash between base and path."""
        assert combine(base_url, path) == "https://h/a"

    def test__nested_path__joined(self) -> None:
        """Join multi-segment paths the same way."""
        assert combine("https://h/", "/a/b") == combine("https://h", "a/b") == "https://h/a/b"

    def test__base_with_path__kept(self) -> None:
        """Keep a path prefix carried by the base URL."""
        assert combine("https://h/app/", "emails/welcome") == "https://h/app/emails/welcome"

    def test__query_and_escapes__untouched(self) -> None:
        """Do not encode or merge anything."""
        assert combine("http://h:8080", "/a b?x=1&y=%20") == "http://h:8080/a b?x=1&y=%20"


class TestIsAbsolute:
    """Tests for is_absolute()."""

    @pytest.mark.parametrize("path", ["http://x/y", "https://x", "HTTP://X", "Https://x"])
    def test__http_prefix__absolute(self, path: str) -> None:
        """Treat any case of an http prefix as absolute."""
        assert is_absolute(path)

    @pytest.mark.parametrize("path", ["/emails/welcome", "emails", "", "ftp://x"])
    def test__other__relative(self, path: str) -> None:
        """Everything else is relative."""
        assert not is_absolute(path)
