"""
Dependency injection for the artists bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the artists context.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.engine import Engine

from bandpulse.application.artists.follow_artist import FollowArtistUseCase
from bandpulse.application.artists.get_artist import GetArtistUseCase
from bandpulse.application.artists.list_followed_artists import ListFollowedArtistsUseCase
from bandpulse.application.artists.search_artists import SearchArtistsUseCase
from bandpulse.application.artists.unfollow_artist import UnfollowArtistUseCase
from bandpulse.application.artists.update_notification_preference import (
    UpdateNotificationPreferenceUseCase,
)
from bandpulse.core.config import settings
from bandpulse.domain.artists.ports import ArtistRepository, FollowRepository, MusicBrainzClient
from bandpulse.infrastructure.artists.artist_repository import SqlArtistRepository
from bandpulse.infrastructure.artists.follow_repository import SqlFollowRepository
from bandpulse.infrastructure.artists.musicbrainz_adapter import HttpMusicBrainzClient
from bandpulse.infrastructure.database import get_engine


def get_artist_repository(engine: Engine = Depends(get_engine)) -> ArtistRepository:
    return SqlArtistRepository(engine)


def get_follow_repository(engine: Engine = Depends(get_engine)) -> FollowRepository:
    return SqlFollowRepository(engine)


@lru_cache
def get_musicbrainz_client() -> MusicBrainzClient:
    """Process-wide MusicBrainz client, so the request throttle is shared."""
    return HttpMusicBrainzClient(
        base_url=settings.musicbrainz_base_url,
        user_agent=settings.musicbrainz_user_agent,
        timeout=settings.musicbrainz_timeout,
        min_interval=settings.musicbrainz_min_interval,
    )


def get_search_artists_use_case(
    artist_repo: ArtistRepository = Depends(get_artist_repository),
    follow_repo: FollowRepository = Depends(get_follow_repository),
    musicbrainz: MusicBrainzClient = Depends(get_musicbrainz_client),
) -> SearchArtistsUseCase:
    """Build SearchArtistsUseCase with its infrastructure dependencies."""
    return SearchArtistsUseCase(
        artist_repo=artist_repo,
        follow_repo=follow_repo,
        musicbrainz=musicbrainz,
        cache_ttl_seconds=settings.artist_cache_ttl,
    )


def get_list_followed_artists_use_case(
    artist_repo: ArtistRepository = Depends(get_artist_repository),
    follow_repo: FollowRepository = Depends(get_follow_repository),
) -> ListFollowedArtistsUseCase:
    """Build ListFollowedArtistsUseCase with its infrastructure dependencies."""
    return ListFollowedArtistsUseCase(artist_repo=artist_repo, follow_repo=follow_repo)


def get_artist_use_case(
    artist_repo: ArtistRepository = Depends(get_artist_repository),
    follow_repo: FollowRepository = Depends(get_follow_repository),
    musicbrainz: MusicBrainzClient = Depends(get_musicbrainz_client),
) -> GetArtistUseCase:
    """Build GetArtistUseCase with its infrastructure dependencies."""
    return GetArtistUseCase(
        artist_repo=artist_repo,
        follow_repo=follow_repo,
        musicbrainz=musicbrainz,
        cache_ttl_seconds=settings.artist_cache_ttl,
    )


def get_follow_artist_use_case(
    artist_repo: ArtistRepository = Depends(get_artist_repository),
    follow_repo: FollowRepository = Depends(get_follow_repository),
) -> FollowArtistUseCase:
    """Build FollowArtistUseCase with its infrastructure dependencies."""
    return FollowArtistUseCase(artist_repo=artist_repo, follow_repo=follow_repo)


def get_unfollow_artist_use_case(
    follow_repo: FollowRepository = Depends(get_follow_repository),
) -> UnfollowArtistUseCase:
    """Build UnfollowArtistUseCase with its infrastructure dependencies."""
    return UnfollowArtistUseCase(follow_repo=follow_repo)


def get_update_notification_preference_use_case(
    follow_repo: FollowRepository = Depends(get_follow_repository),
) -> UpdateNotificationPreferenceUseCase:
    """Build UpdateNotificationPreferenceUseCase with its infrastructure dependencies."""
    return UpdateNotificationPreferenceUseCase(follow_repo=follow_repo)
