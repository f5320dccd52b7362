"""
Use case: List the artists a user follows.

Input: ListFollowedArtistsQuery (user_id)
Output: list[Artist], most recently followed first
Side effects: None.
Failure cases: None.
"""

import logging

from bandpulse.application.artists.dtos import ListFollowedArtistsQuery
from bandpulse.domain.artists.entities import Artist
from bandpulse.domain.artists.ports import ArtistRepository, FollowRepository

logger = logging.getLogger(__name__)


class ListFollowedArtistsUseCase:
    """Resolves a user's follows into artists, keeping follow order."""

    def __init__(
        self, artist_repo: ArtistRepository, follow_repo: FollowRepository
    ) -> None:
        self._artist_repo = artist_repo
        self._follow_repo = follow_repo

    def execute(self, query: ListFollowedArtistsQuery) -> list[Artist]:
        follows = self._follow_repo.list_by_user(query.user_id)
        if not follows:
            return []

        artist_ids = [follow.artist_id for follow in follows]
        by_id = {artist.id: artist for artist in self._artist_repo.find_by_ids(artist_ids)}

        missing = [artist_id for artist_id in artist_ids if artist_id not in by_id]
        if missing:
            logger.warning(
                "Follows reference missing artists: user_id=%s, artist_ids=%s",
                query.user_id,
                missing,
            )

        return [by_id[artist_id] for artist_id in artist_ids if artist_id in by_id]
