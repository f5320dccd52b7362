"""
Pydantic schemas for artist API request/response validation.

These schemas define the API contract. Field names are snake_case in
Python and camelCase on the wire.
No business logic belongs here.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SEARCH_QUERY_MIN_LEN = 2
SEARCH_QUERY_MAX_LEN = 100
SEARCH_LIMIT_MAX = 50
ARTIST_ID_MAX_LEN = 64


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, population by field name allowed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ArtistAliasSchema(CamelModel):
    name: str
    sort_name: Optional[str] = None
    locale: Optional[str] = None
    primary: Optional[bool] = None
    type: Optional[str] = None


class ArtistAreaSchema(CamelModel):
    """Country or region of origin.

    Attributes:
        name: Area name.
        iso_3166_1: ISO 3166-1 alpha-2 country code.
    """

    name: str
    iso_3166_1: Optional[str] = Field(default=None, alias="iso31661")


class ArtistResponse(CamelModel):
    """An artist as returned by the API. Internal fields are excluded.

    ``is_following`` is only present when computed for the viewer.
    """

    id: str
    name: str
    slug: str
    aliases: list[ArtistAliasSchema]
    area: Optional[ArtistAreaSchema] = None
    image_url: Optional[str] = None
    genres: Optional[list[str]] = None
    metadata: Optional[dict[str, Any]] = None
    is_following: Optional[bool] = None


class ArtistDetailResponse(ArtistResponse):
    """Single-artist lookup: the artist plus its follower count."""

    follower_count: int


class FollowResponse(CamelModel):
    """A follow as returned by the API. Never carries the user id."""

    artist_id: str
    followed_at: datetime
    notifications_enabled: bool


class FollowResultResponse(CamelModel):
    success: bool = True
    follow: FollowResponse


class SuccessResponse(CamelModel):
    success: bool = True


class UpdateNotificationPreferenceRequest(CamelModel):
    """Request body for toggling notifications on a follow."""

    notifications_enabled: bool = Field(
        ..., description="Whether to notify the user about this artist's events"
    )


class ErrorDetail(BaseModel):
    path: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response body.

    Attributes:
        error: Human-readable error message.
        details: Per-field issues, present on validation errors only.
    """

    error: str
    details: Optional[list[ErrorDetail]] = None


class HealthResponse(BaseModel):
    """Response schema for health check endpoint."""

    status: str
    version: str
    environment: str
    timestamp: datetime
