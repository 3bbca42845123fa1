from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

from shortlink_app.models.url import URL


class ShortenRequest(BaseModel):
    """Body of POST /api/shorten. `longUrl` is accepted as an alias of `url`."""
    url: Optional[str] = None
    long_url: Optional[str] = Field(default=None, alias="longUrl")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def submitted_url(self) -> Optional[str]:
        return self.url or self.long_url


class URLResponse(BaseModel):
    """Response schema for a URL record, serialized with camelCase keys

    short_url is not stored: it depends on the configured base URL or the
    request host, so it is passed in by the route.
    """
    id: Optional[int] = None
    short_code: str
    short_url: str
    original_url: str
    visits: int
    created_at: datetime

    # Pydantic V2 style configuration
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_record(cls, url: URL, base_url: str, include_id: bool = True) -> "URLResponse":
        return cls(
            id=url.id if include_id else None,
            short_code=url.short_code,
            short_url=f"{base_url}/{url.short_code}",
            original_url=url.original_url,
            visits=url.visits,
            created_at=url.created_at,
        )


class ErrorResponse(BaseModel):
    error: str
