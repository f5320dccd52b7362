"""
Use case: Follow an artist.

Input: FollowArtistCommand (user_id, artist_id)
Output: Follow
Side effects: Persists a follow with notifications enabled.
Failure cases: ArtistNotFoundError, AlreadyFollowingError.
"""

import logging

from bandpulse.application.artists.dtos import FollowArtistCommand
from bandpulse.domain.artists.entities import Follow, FollowCreateOptions
from bandpulse.domain.artists.errors import ArtistNotFoundError
from bandpulse.domain.artists.ports import ArtistRepository, FollowRepository

logger = logging.getLogger(__name__)


class FollowArtistUseCase:
    """Creates a follow after checking that the artist exists.

    Duplicate detection is left to the follow repository, which
    relies on the store's unique constraint.
    """

    def __init__(
        self, artist_repo: ArtistRepository, follow_repo: FollowRepository
    ) -> None:
        self._artist_repo = artist_repo
        self._follow_repo = follow_repo

    def execute(self, command: FollowArtistCommand) -> Follow:
        """Run the follow use case.

        Args:
            command: Who follows which artist.

        Returns:
            The persisted follow.
        """
        artist = self._artist_repo.find_by_id(command.artist_id)
        if artist is None:
            raise ArtistNotFoundError(command.artist_id)

        follow = self._follow_repo.create(
            FollowCreateOptions(
                user_id=command.user_id,
                artist_id=command.artist_id,
                notifications_enabled=True,
            )
        )

        logger.info(
            "User followed artist: user_id=%s, artist_id=%s, artist_name=%s",
            command.user_id,
            command.artist_id,
            artist.name,
        )
        return follow
