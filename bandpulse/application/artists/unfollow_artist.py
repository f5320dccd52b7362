"""
Use case: Unfollow an artist.

Input: UnfollowArtistCommand (user_id, artist_id)
Output: None
Side effects: Deletes the follow. No history is kept.
Failure cases: NotFollowingError.
"""

import logging

from bandpulse.application.artists.dtos import UnfollowArtistCommand
from bandpulse.domain.artists.errors import NotFollowingError
from bandpulse.domain.artists.ports import FollowRepository

logger = logging.getLogger(__name__)


class UnfollowArtistUseCase:
    """Removes a follow relationship."""

    def __init__(self, follow_repo: FollowRepository) -> None:
        self._follow_repo = follow_repo

    def execute(self, command: UnfollowArtistCommand) -> None:
        if not self._follow_repo.delete(command.user_id, command.artist_id):
            raise NotFollowingError(command.user_id, command.artist_id)

        logger.info(
            "User unfollowed artist: user_id=%s, artist_id=%s",
            command.user_id,
            command.artist_id,
        )
