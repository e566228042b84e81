"""Tests for parody.services.capture.url."""

import pytest

from parody.services.capture import normalize_url


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("example.com", "https://example.com"),
            ("www.example.com/path?q=1", "https://www.example.com/path?q=1"),
            ("  example.com  ", "https://example.com"),
        ],
    )
    def test_prepends_https_when_scheme_missing(self, raw, expected):
        assert normalize_url(raw) == expected

    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "http://example.com", "HTTPS://Example.com/a"],
    )
    def test_existing_scheme_untouched(self, url):
        assert normalize_url(url) == url

    def test_idempotent(self):
        once = normalize_url("example.com")
        assert normalize_url(once) == once
        assert normalize_url(normalize_url(once)) == "https://example.com"
