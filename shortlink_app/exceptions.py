"""
Exception hierarchy for the URL shortener.

Client errors carry the message shown to the caller; storage and internal
errors are reported to clients with a generic message only.
"""


class ShortLinkError(Exception):
    """Base class for all service errors"""

    status_code = 500
    public_message = "Internal Server Error"


class MissingURLError(ShortLinkError):
    """No URL was supplied"""

    status_code = 400
    public_message = 'Missing "url" in request body or query'


class InvalidURLError(ShortLinkError):
    """Supplied value is not an absolute http(s) URL"""

    status_code = 400
    public_message = "Invalid URL"


class CodeExhaustionError(ShortLinkError):
    """Every generated short code collided with an existing one"""

    public_message = "Failed to generate unique short code"

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Could not generate unique short code after {attempts} attempts. "
            f"Consider increasing short_code_length."
        )


class ShortCodeNotFoundError(ShortLinkError):
    """No record matches the short code"""

    status_code = 404
    public_message = "Short link not found"

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code not found: {short_code}")


class ConflictError(ShortLinkError):
    """Insert violated a uniqueness constraint (original_url or short_code)"""

    status_code = 409


class StoreError(ShortLinkError):
    """Unexpected storage failure"""
