"""
FastAPI dependencies for dependency injection.

The store is built per request around a request-scoped session; services
are built around the store. Tests override `get_db` (or any of these) via
`app.dependency_overrides`.
"""

from typing import Optional

from fastapi import Depends, Query, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from shortlink_app.config import settings
from shortlink_app.database.connection import get_db
from shortlink_app.exceptions import InvalidURLError
from shortlink_app.schemas.url import ShortenRequest
from shortlink_app.services.redirect_service import RedirectResolver
from shortlink_app.services.url_service import URLService
from shortlink_app.storage.strategies import SQLAlchemyURLStore, URLStore

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_url_store(db: Session = Depends(get_db)) -> URLStore:
    """URL store bound to this request's session"""
    return SQLAlchemyURLStore(db)


def get_url_service(store: URLStore = Depends(get_url_store)) -> URLService:
    """URLService with the configured short code strategy"""
    return URLService(store=store)


def get_redirect_resolver(store: URLStore = Depends(get_url_store)) -> RedirectResolver:
    return RedirectResolver(store=store)


def get_base_url(request: Request) -> str:
    """Configured BASE_URL, or the request's own scheme + host"""
    if settings.base_url:
        return settings.base_url.rstrip("/")
    host = request.headers.get("host") or request.url.netloc
    return f"{request.url.scheme}://{host}"


async def get_submitted_url(
    request: Request,
    url: Optional[str] = Query(default=None),
    long_url: Optional[str] = Query(default=None, alias="longUrl"),
) -> Optional[str]:
    """
    URL to shorten, from the request body (`url` or `longUrl`) or the query string.

    Form-encoded bodies are read as forms; anything else is tried as JSON.
    A body that isn't a JSON object is ignored. A non-string `url` in the
    body is rejected as an invalid URL.
    """
    payload = {}
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        payload = {key: form.get(key) for key in ("url", "longUrl") if key in form}
    elif await request.body():
        try:
            payload = await request.json()
        except ValueError:
            payload = {}

    if isinstance(payload, dict):
        try:
            body = ShortenRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidURLError(str(e)) from e
        if body.submitted_url:
            return body.submitted_url

    return url or long_url
