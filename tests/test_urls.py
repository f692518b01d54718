"""Tests for URL extraction."""

import pytest
import re2

from strutil import extract_urls


class TestExtractUrls:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("blahhttps://google.com", "https://google.com"),
            ("blah https://google.com", "https://google.com"),
            ("[url=https://google.com]", "https://google.com"),
            ("[url=http://google.com]", "http://google.com"),
            ("foowww.google.com]", "www.google.com"),
            ("see HTTPS://Example.com/a?b=1.", "HTTPS://Example.com/a?b=1"),
            ('<a href="https://x.org/p">', "https://x.org/p"),
        ],
    )
    def test_extracts_first(self, text: str, expected: str) -> None:
        result = extract_urls(text)
        assert result is not None
        assert result[0] == expected

    def test_extracts_multiple(self) -> None:
        result = extract_urls("https://google.com https://www.foobar.com blue")
        assert result == ["https://google.com", "https://www.foobar.com"]

    def test_no_urls_returns_empty_list(self) -> None:
        assert extract_urls("google.com") == []

    @pytest.mark.parametrize("text", [None, "", "   ", "\n\t"])
    def test_blank_returns_none(self, text: str | None) -> None:
        assert extract_urls(text) is None

    def test_custom_pattern(self) -> None:
        pattern = re2.compile(r"ftp://\S+")
        assert extract_urls("get ftp://files.example/x now", pattern=pattern) == [
            "ftp://files.example/x"
        ]
