"""
Use case: Search artists by name.

Input: SearchArtistsQuery (user_id, query, limit)
Output: list[ArtistForViewer]
Side effects: On a cache miss, artists found on MusicBrainz are upserted.
Failure cases: None. An empty result is a valid answer, and MusicBrainz
    failures fall back to whatever the store holds, stale or not.
"""

import logging

from bandpulse.application.artists.dtos import ArtistForViewer, SearchArtistsQuery
from bandpulse.domain.artists.entities import Artist, is_cache_valid
from bandpulse.domain.artists.errors import MusicBrainzUnavailableError
from bandpulse.domain.artists.ports import (
    ArtistRepository,
    FollowRepository,
    MusicBrainzClient,
)

logger = logging.getLogger(__name__)


class SearchArtistsUseCase:
    """Cache-first artist search, decorated with follow status.

    The store is searched first. Only when none of the stored matches
    is fresh is MusicBrainz queried; its results are persisted and
    returned from the store. Follow status for all results is fetched
    in one batched lookup.
    """

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

    def execute(self, query: SearchArtistsQuery) -> list[ArtistForViewer]:
        cached = self._artist_repo.search(query.query, query.limit)
        fresh = [a for a in cached if is_cache_valid(a, self._cache_ttl_seconds)]

        if fresh:
            logger.info(
                "Artist search: cache hit, query=%r, results=%d", query.query, len(fresh)
            )
            artists = fresh
        else:
            artists = self._search_musicbrainz(query, cached)

        status = self._follow_repo.check_multiple(
            query.user_id, [artist.id for artist in artists]
        )
        return [
            ArtistForViewer(artist=artist, is_following=status.get(artist.id, False))
            for artist in artists
        ]

    def _search_musicbrainz(
        self, query: SearchArtistsQuery, cached: list[Artist]
    ) -> list[Artist]:
        logger.info("Artist search: cache miss, querying MusicBrainz, query=%r", query.query)
        try:
            found = self._musicbrainz.search_artists(query.query, query.limit)
        except MusicBrainzUnavailableError as exc:
            logger.error(
                "Artist search: MusicBrainz unavailable, returning cached, query=%r, error=%s",
                query.query,
                exc.message,
            )
            return cached

        if not found:
            logger.info("Artist search: no results from MusicBrainz, query=%r", query.query)
            return cached

        stored = [self._artist_repo.upsert(artist) for artist in found]
        logger.info(
            "Artist search: persisted from MusicBrainz, query=%r, count=%d",
            query.query,
            len(stored),
        )
        return stored
