"""
Domain-specific errors for the artists bounded context.

All errors raised from the domain and application layers are defined
here. Each one is operational and carries the HTTP status the client
sees; the error middleware turns them into responses.
"""

from bandpulse.shared.errors.base import AppError

HTTP_400 = 400
HTTP_401 = 401
HTTP_404 = 404
HTTP_502 = 502


class ArtistNotFoundError(AppError):
    """Raised when an artist id does not match any stored artist."""

    def __init__(self, artist_id: str) -> None:
        super().__init__("Artist not found", HTTP_404)
        self.artist_id = artist_id


class AlreadyFollowingError(AppError):
    """Raised when a user follows an artist they already follow."""

    def __init__(self, user_id: str, artist_id: str) -> None:
        super().__init__("Already following this artist", HTTP_400)
        self.user_id = user_id
        self.artist_id = artist_id


class NotFollowingError(AppError):
    """Raised when acting on a follow that does not exist."""

    def __init__(self, user_id: str, artist_id: str) -> None:
        super().__init__("Not following this artist", HTTP_404)
        self.user_id = user_id
        self.artist_id = artist_id


class AuthenticationError(AppError):
    """Raised when a request carries no usable bearer token."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message, HTTP_401)


class MusicBrainzUnavailableError(AppError):
    """Raised when MusicBrainz cannot be reached or answers with an error.

    Use cases catch it and fall back to cached artists.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, HTTP_502)
