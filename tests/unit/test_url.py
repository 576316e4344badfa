"""Tests for URL resolution."""

import pytest

from halforms.utils.url import absolutize, is_absolute


class TestAbsolutize:
    @pytest.mark.parametrize(
        ("url", "base", "expected"),
        [
            ("/test", "https://hal.test/hello/", "https://hal.test/test"),
            ("test", "https://hal.test/hello/", "https://hal.test/hello/test"),
            ("test", "https://hal.test/hello", "https://hal.test/test"),
            ("../up", "https://hal.test/a/b/", "https://hal.test/a/up"),
            ("?page=2", "https://hal.test/orders", "https://hal.test/orders?page=2"),
        ],
    )
    def test_absolute_base(self, url, base, expected):
        assert absolutize(url, base) == expected

    def test_absolute_url_is_kept(self):
        absolutized = absolutize(
            "https://subdomain.hal.test/test",
            "https://hal.test/hello/",
        )
        assert absolutized == "https://subdomain.hal.test/test"

    @pytest.mark.parametrize(
        ("url", "base", "expected"),
        [
            ("/test", "/hello/", "/test"),
            ("/test", "/hello", "/test"),
            ("test", "/hello/", "/hello/test"),
            ("test", "/hello", "/test"),
        ],
    )
    def test_relative_base(self, url, base, expected):
        assert absolutize(url, base) == expected

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("/test", "/test"),
            ("test", "/test"),
            ("test/hello", "/test/hello"),
            ("/test/hello", "/test/hello"),
        ],
    )
    def test_no_base(self, url, expected):
        assert absolutize(url) == expected
        assert absolutize(url, None) == expected


class TestIsAbsolute:
    def test_schemes(self):
        assert is_absolute("https://hal.test")
        assert is_absolute("urn:isbn:0451450523")
        assert is_absolute("HTTP://HAL.TEST")

    def test_not_absolute(self):
        assert not is_absolute("/orders")
        assert not is_absolute("orders/1")
        assert not is_absolute(None)
