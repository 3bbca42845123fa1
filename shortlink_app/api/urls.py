from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from shortlink_app.dependencies import get_base_url, get_submitted_url, get_url_service
from shortlink_app.schemas.url import ErrorResponse, URLResponse
from shortlink_app.services.url_service import URLService

router = APIRouter(prefix="/api", tags=["urls"])


@router.post(
    "/shorten",
    response_model=URLResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": URLResponse, "description": "URL was already shortened"},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def shorten_url(
    response: Response,
    original_url: Optional[str] = Depends(get_submitted_url),
    base_url: str = Depends(get_base_url),
    url_service: URLService = Depends(get_url_service)
):
    """Shorten a URL. Re-submitting a known URL returns its existing short code."""
    url, created = url_service.shorten(original_url)

    if not created:
        response.status_code = status.HTTP_200_OK
        return URLResponse.from_record(url, base_url, include_id=False)

    return URLResponse.from_record(url, base_url)


@router.get("/urls", response_model=List[URLResponse], responses={500: {"model": ErrorResponse}})
def list_urls(
    base_url: str = Depends(get_base_url),
    url_service: URLService = Depends(get_url_service)
):
    """List all shortened URLs, newest first"""
    return [URLResponse.from_record(url, base_url) for url in url_service.list_urls()]
