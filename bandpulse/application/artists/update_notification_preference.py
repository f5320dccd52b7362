"""
Use case: Toggle notifications for a followed artist.

Input: UpdateNotificationPreferenceCommand (user_id, artist_id, enabled)
Output: Follow (after the update)
Side effects: Updates notifications_enabled on the follow.
Failure cases: NotFollowingError.
"""

import logging

from bandpulse.application.artists.dtos import UpdateNotificationPreferenceCommand
from bandpulse.domain.artists.entities import Follow
from bandpulse.domain.artists.errors import NotFollowingError
from bandpulse.domain.artists.ports import FollowRepository

logger = logging.getLogger(__name__)


class UpdateNotificationPreferenceUseCase:
    """Changes the notification flag of an existing follow.

    Only the owning user can reach their follow: the lookup is keyed
    by the authenticated user id.
    """

    def __init__(self, follow_repo: FollowRepository) -> None:
        self._follow_repo = follow_repo

    def execute(self, command: UpdateNotificationPreferenceCommand) -> Follow:
        """Run the update.

        Args:
            command: Target follow and the new flag value.

        Returns:
            The follow as stored after the update.
        """
        updated = self._follow_repo.update_notification_preference(
            command.user_id, command.artist_id, command.enabled
        )
        follow = self._follow_repo.find_one(command.user_id, command.artist_id)
        if not updated or follow is None:
            raise NotFollowingError(command.user_id, command.artist_id)

        logger.info(
            "Notification preference updated: user_id=%s, artist_id=%s, enabled=%s",
            command.user_id,
            command.artist_id,
            command.enabled,
        )
        return follow
