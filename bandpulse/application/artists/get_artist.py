"""
Use case: Look up one artist for a viewer.

Input: GetArtistQuery (user_id, artist_id)
Output: ArtistDetail (artist, is_following, follower_count)
Side effects: A stale artist is refreshed from MusicBrainz and upserted.
Failure cases: ArtistNotFoundError. MusicBrainz failures never fail the
    lookup; the stored data is returned instead.
"""

import logging

from bandpulse.application.artists.dtos import ArtistDetail, GetArtistQuery
from bandpulse.domain.artists.entities import Artist, is_cache_valid
from bandpulse.domain.artists.errors import ArtistNotFoundError, MusicBrainzUnavailableError
from bandpulse.domain.artists.ports import (
    ArtistRepository,
    FollowRepository,
    MusicBrainzClient,
)

logger = logging.getLogger(__name__)


class GetArtistUseCase:
    """Fetches an artist with the viewer's follow status and follower count."""

    def __init__(
        self,
        artist_repo: ArtistRepository,
        follow_repo: FollowRepository,
        musicbrainz: MusicBrainzClient,
        cache_ttl_seconds: int,
    ) -> None:
        self._artist_repo = artist_repo
        self._follow_repo = follow_repo
        self._musicbrainz = musicbrainz
        self._cache_ttl_seconds = cache_ttl_seconds

    def execute(self, query: GetArtistQuery) -> ArtistDetail:
        artist = self._artist_repo.find_by_id(query.artist_id)
        if artist is None:
            raise ArtistNotFoundError(query.artist_id)

        if not is_cache_valid(artist, self._cache_ttl_seconds):
            artist = self._refresh(artist)

        return ArtistDetail(
            artist=artist,
            is_following=self._follow_repo.exists(query.user_id, artist.id),
            follower_count=self._follow_repo.follower_count(artist.id),
        )

    def _refresh(self, artist: Artist) -> Artist:
        """Re-fetch identity data from MusicBrainz. Falls back to ``artist``."""
        logger.debug(
            "Refreshing artist from MusicBrainz: artist_id=%s, mbid=%s", artist.id, artist.mbid
        )
        try:
            fetched = self._musicbrainz.get_artist(artist.mbid)
        except MusicBrainzUnavailableError as exc:
            logger.error(
                "Failed to refresh artist from MusicBrainz: mbid=%s, error=%s",
                artist.mbid,
                exc.message,
            )
            return artist

        if fetched is None:
            logger.warning(
                "Artist not found in MusicBrainz during refresh: mbid=%s", artist.mbid
            )
            return artist
        if fetched.mbid != artist.mbid:
            # Merged on MusicBrainz; upserting would create a second artist
            logger.warning(
                "Artist MBID changed on MusicBrainz: mbid=%s, now=%s", artist.mbid, fetched.mbid
            )
            return artist

        return self._artist_repo.upsert(fetched)
