"""
URL validation.

Parses with pydantic's AnyUrl (WHATWG-style parsing, no length cap) and
then requires an http or https scheme and a host.
"""

from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

_url_adapter = TypeAdapter(AnyUrl)

ALLOWED_SCHEMES = ("http", "https")


def is_valid_url(candidate: Any) -> bool:
    """Return True if candidate is an absolute http(s) URL"""
    if not isinstance(candidate, str) or not candidate:
        return False

    try:
        parsed = _url_adapter.validate_python(candidate)
    except ValidationError:
        return False

    return parsed.scheme in ALLOWED_SCHEMES and bool(parsed.host)
