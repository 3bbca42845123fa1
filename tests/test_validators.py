"""
Tests for URL validation.
"""
import pytest

from shortlink_app.services.validators import is_valid_url


@pytest.mark.parametrize("candidate", [
    "http://example.com",
    "https://example.com",
    "https://example.com/a",
    "https://example.com/path?q=1&r=two#frag",
    "http://localhost:3000/",
    "https://sub.domain.example.org:8443/x/y",
    "http://127.0.0.1/",
    "HTTPS://EXAMPLE.COM/",
    "https://example.com/" + "a" * 3000,
])
def test_accepts_http_and_https(candidate):
    assert is_valid_url(candidate) is True


@pytest.mark.parametrize("candidate", [
    "not a url",
    "ftp://example.com",
    "mailto:someone@example.com",
    "javascript:alert(1)",
    "file:///etc/passwd",
    "example.com",
    "/relative/path",
    "http://",
    "",
    None,
    42,
    ["https://example.com"],
])
def test_rejects_everything_else(candidate):
    assert is_valid_url(candidate) is False
