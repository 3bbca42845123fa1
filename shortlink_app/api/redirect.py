import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from shortlink_app.dependencies import get_redirect_resolver
from shortlink_app.exceptions import ShortCodeNotFoundError
from shortlink_app.services.redirect_service import RedirectResolver

logger = logging.getLogger("shortlink.api.redirect")

router = APIRouter(tags=["redirect"])


@router.get("/{short_code}")
def redirect_to_original_url(
    short_code: str,
    resolver: RedirectResolver = Depends(get_redirect_resolver)
):
    """
    Redirect to the original URL.

    Flow:
    1. Look up the short code
    2. Count the visit (best-effort, never blocks the redirect)
    3. 302 to the original URL

    Errors are plain text, not JSON: this endpoint is hit by browsers.
    """
    try:
        destination = resolver.resolve(short_code)
    except ShortCodeNotFoundError as e:
        return PlainTextResponse(e.public_message, status_code=status.HTTP_404_NOT_FOUND)
    except Exception:
        logger.exception("Redirect failed for %s", short_code)
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return RedirectResponse(url=destination, status_code=status.HTTP_302_FOUND)
