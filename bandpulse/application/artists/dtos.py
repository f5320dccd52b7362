"""
Data Transfer Objects for the artists application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass

from bandpulse.domain.artists.entities import Artist

DEFAULT_SEARCH_LIMIT = 10


@dataclass(frozen=True)
class FollowArtistCommand:
    """Input DTO for following an artist.

    Attributes:
        user_id: Authenticated user performing the follow.
        artist_id: Store id of the artist to follow.
    """

    user_id: str
    artist_id: str


@dataclass(frozen=True)
class UnfollowArtistCommand:
    """Input DTO for unfollowing an artist."""

    user_id: str
    artist_id: str


@dataclass(frozen=True)
class UpdateNotificationPreferenceCommand:
    """Input DTO for toggling notifications on an existing follow.

    Attributes:
        user_id: Owner of the follow.
        artist_id: Followed artist.
        enabled: New value of the notification flag.
    """

    user_id: str
    artist_id: str
    enabled: bool


@dataclass(frozen=True)
class ListFollowedArtistsQuery:
    user_id: str


@dataclass(frozen=True)
class GetArtistQuery:
    """Input DTO for looking up one artist on behalf of a viewer.

    Attributes:
        user_id: The viewer, used to compute follow status.
        artist_id: Store id of the artist.
    """

    user_id: str
    artist_id: str


@dataclass(frozen=True)
class SearchArtistsQuery:
    """Input DTO for searching artists by name.

    Attributes:
        user_id: The viewer, used to compute follow status.
        query: Name fragment to search for.
        limit: Maximum number of results.
    """

    user_id: str
    query: str
    limit: int = DEFAULT_SEARCH_LIMIT


@dataclass(frozen=True)
class ArtistForViewer:
    """Output DTO: an artist and whether the viewer follows it."""

    artist: Artist
    is_following: bool


@dataclass(frozen=True)
class ArtistDetail:
    """Output DTO for a single artist lookup.

    Attributes:
        artist: The stored artist.
        is_following: Whether the viewer follows the artist.
        follower_count: Number of users following the artist.
    """

    artist: Artist
    is_following: bool
    follower_count: int
