"""
Port interfaces (ABCs) for the artists bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from bandpulse.domain.artists.entities import Artist, Follow, FollowCreateOptions


class ArtistRepository(ABC):
    """Port for reading and writing artists."""

    @abstractmethod
    def find_by_id(self, artist_id: str) -> Optional[Artist]:
        """Return the artist with this store id, or None."""
        raise NotImplementedError

    @abstractmethod
    def find_by_ids(self, artist_ids: list[str]) -> list[Artist]:
        """Return the artists matching these ids, in no particular order."""
        raise NotImplementedError

    @abstractmethod
    def search(self, query: str, limit: int = 10) -> list[Artist]:
        """Return artists whose name contains ``query``, shorter names first.

        Args:
            query: Case-insensitive fragment of a name.
            limit: Maximum number of artists to return.
        """
        raise NotImplementedError

    @abstractmethod
    def upsert(self, artist: Artist) -> Artist:
        """Insert or update an artist keyed by its MusicBrainz id.

        On update, enrichment fields (``image_url``, ``genres``,
        ``metadata``) left as None keep their stored values.

        Returns:
            The stored artist, with ``id`` and slug assigned.
        """
        raise NotImplementedError


class FollowRepository(ABC):
    """Port for persisting follow relationships.

    Implementations must guarantee at most one follow per
    (user_id, artist_id) and raise AlreadyFollowingError otherwise.
    """

    @abstractmethod
    def create(self, options: FollowCreateOptions) -> Follow:
        """Persist a new follow.

        Raises:
            AlreadyFollowingError: If the user already follows the artist.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, user_id: str, artist_id: str) -> bool:
        """Remove a follow. Returns True if one was deleted."""
        raise NotImplementedError

    @abstractmethod
    def exists(self, user_id: str, artist_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def find_one(self, user_id: str, artist_id: str) -> Optional[Follow]:
        raise NotImplementedError

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Follow]:
        """Return a user's follows, most recent first."""
        raise NotImplementedError

    @abstractmethod
    def follower_count(self, artist_id: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def update_notification_preference(
        self, user_id: str, artist_id: str, enabled: bool
    ) -> bool:
        """Set the notification flag of a follow. Returns True if one matched."""
        raise NotImplementedError

    @abstractmethod
    def check_multiple(self, user_id: str, artist_ids: list[str]) -> dict[str, bool]:
        """Return ``{artist_id: is_following}`` for every id given."""
        raise NotImplementedError


class MusicBrainzClient(ABC):
    """Port for the MusicBrainz artist catalogue.

    Returned artists are unsaved: ``id`` is None and ``slug`` is empty.
    Both methods raise MusicBrainzUnavailableError when the service
    cannot be used.
    """

    @abstractmethod
    def search_artists(self, query: str, limit: int = 10) -> list[Artist]:
        """Search artists by name, best match first."""
        raise NotImplementedError

    @abstractmethod
    def get_artist(self, mbid: str) -> Optional[Artist]:
        """Look up one artist with its aliases. None if MusicBrainz has no such MBID."""
        raise NotImplementedError

    def close(self) -> None:
        """Release network resources. No-op by default."""
