"""
Response mappers: stored entities to API response schemas.

Mappers are pure functions. They reshape and redact; they never query,
count or aggregate. Anything computed for the viewer (follow status,
follower count) is passed in by the caller.
"""

from dataclasses import asdict
from typing import Any, Optional

from bandpulse.domain.artists.entities import Artist, Follow
from bandpulse.interfaces.artists.schemas import (
    ArtistDetailResponse,
    ArtistResponse,
    FollowResponse,
)


def to_follow_response(follow: Follow) -> FollowResponse:
    """Project a follow onto its API shape.

    ``user_id`` and the store id are dropped. ``artist_id`` must be set.
    """
    return FollowResponse(
        artist_id=str(follow.artist_id),
        followed_at=follow.followed_at,
        notifications_enabled=follow.notifications_enabled,
    )


def _artist_fields(artist: Artist) -> dict[str, Any]:
    return {
        "id": str(artist.id),
        "name": artist.name,
        "slug": artist.slug,
        "aliases": [asdict(alias) for alias in artist.aliases],
        "area": asdict(artist.area) if artist.area else None,
        "image_url": artist.image_url,
        "genres": artist.genres,
        "metadata": artist.metadata,
    }


def to_artist_response(artist: Artist, is_following: Optional[bool] = None) -> ArtistResponse:
    """Project an artist onto its API shape.

    Args:
        artist: A persisted artist (``id`` set).
        is_following: The viewer's follow status, if the caller computed it.
    """
    return ArtistResponse(**_artist_fields(artist), is_following=is_following)


def to_artist_detail_response(
    artist: Artist, is_following: Optional[bool], follower_count: int
) -> ArtistDetailResponse:
    """Like ``to_artist_response``, plus a caller-supplied follower count."""
    return ArtistDetailResponse(
        **_artist_fields(artist),
        is_following=is_following,
        follower_count=follower_count,
    )
