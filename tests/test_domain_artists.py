"""
Tests for the artists domain layer.

Tests entities, construction helpers and error classes in isolation.
No external dependencies or IO required.
"""

from datetime import datetime, timedelta, timezone

from bandpulse.domain.artists.entities import (
    DEFAULT_NOTIFICATIONS_ENABLED,
    SLUG_MAX_LEN,
    Artist,
    FollowCreateOptions,
    is_cache_valid,
    new_follow,
    slugify,
)
from bandpulse.domain.artists.errors import (
    AlreadyFollowingError,
    ArtistNotFoundError,
    AuthenticationError,
    MusicBrainzUnavailableError,
    NotFollowingError,
)
from bandpulse.shared.errors.base import AppError


class TestNewFollow:
    """Tests for building a Follow from creation options."""

    def test_notifications_default_is_explicit(self) -> None:
        """Omitting the flag uses DEFAULT_NOTIFICATIONS_ENABLED."""
        options = FollowCreateOptions(user_id="u1", artist_id="a1")
        assert options.notifications_enabled is DEFAULT_NOTIFICATIONS_ENABLED
        assert new_follow(options).notifications_enabled is True

    def test_flag_can_be_disabled(self) -> None:
        options = FollowCreateOptions(user_id="u1", artist_id="a1", notifications_enabled=False)
        assert new_follow(options).notifications_enabled is False

    def test_followed_at_defaults_to_now_utc(self) -> None:
        """followed_at is stamped with an aware UTC time."""
        before = datetime.now(timezone.utc)
        follow = new_follow(FollowCreateOptions(user_id="u1", artist_id="a1"))
        after = datetime.now(timezone.utc)

        assert follow.followed_at.tzinfo is not None
        assert before <= follow.followed_at <= after

    def test_explicit_followed_at_is_kept(self) -> None:
        stamp = datetime(2024, 5, 1, 20, 30, tzinfo=timezone.utc)
        follow = new_follow(FollowCreateOptions(user_id="u1", artist_id="a1"), followed_at=stamp)
        assert follow.followed_at == stamp

    def test_new_follow_is_unsaved(self) -> None:
        follow = new_follow(FollowCreateOptions(user_id="u1", artist_id="a1"))
        assert follow.id is None
        assert (follow.user_id, follow.artist_id) == ("u1", "a1")


class TestSlugify:
    """Tests for URL slug generation."""

    def test_lowercases_and_hyphenates(self) -> None:
        assert slugify("Red Hot Chili Peppers") == "red-hot-chili-peppers"

    def test_strips_accents(self) -> None:
        assert slugify("Sigur Rós") == "sigur-ros"

    def test_collapses_punctuation(self) -> None:
        assert slugify("  AC/DC!! ") == "ac-dc"

    def test_non_latin_name_gives_empty_slug(self) -> None:
        assert slugify("坂本龍一") == ""

    def test_long_names_are_capped(self) -> None:
        slug = slugify("a " * 60)
        assert len(slug) <= SLUG_MAX_LEN
        assert not slug.endswith("-")


class TestIsCacheValid:
    """Tests for artist cache freshness."""

    NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    TTL = 7 * 24 * 60 * 60

    def _artist(self, last_fetched_at):
        return Artist(name="Low", slug="low", mbid="m1", last_fetched_at=last_fetched_at)

    def test_never_fetched_is_stale(self) -> None:
        assert is_cache_valid(self._artist(None), self.TTL, now=self.NOW) is False

    def test_recent_fetch_is_fresh(self) -> None:
        artist = self._artist(self.NOW - timedelta(days=6))
        assert is_cache_valid(artist, self.TTL, now=self.NOW) is True

    def test_fetch_older_than_ttl_is_stale(self) -> None:
        artist = self._artist(self.NOW - timedelta(days=7, seconds=1))
        assert is_cache_valid(artist, self.TTL, now=self.NOW) is False

    def test_defaults_to_current_time(self) -> None:
        artist = self._artist(datetime.now(timezone.utc))
        assert is_cache_valid(artist, self.TTL) is True


class TestDomainErrors:
    """Tests for domain error classes."""

    def test_domain_errors_are_operational(self) -> None:
        errors = [
            ArtistNotFoundError("a1"),
            AlreadyFollowingError("u1", "a1"),
            NotFollowingError("u1", "a1"),
            AuthenticationError(),
            MusicBrainzUnavailableError("timeout"),
        ]
        for error in errors:
            assert isinstance(error, AppError)
            assert error.is_operational is True

    def test_status_codes(self) -> None:
        assert ArtistNotFoundError("a1").status_code == 404
        assert AlreadyFollowingError("u1", "a1").status_code == 400
        assert NotFollowingError("u1", "a1").status_code == 404
        assert AuthenticationError().status_code == 401

    def test_messages(self) -> None:
        assert ArtistNotFoundError("a1").message == "Artist not found"
        assert str(AlreadyFollowingError("u1", "a1")) == "Already following this artist"
        assert AuthenticationError("No token provided").message == "No token provided"

    def test_app_error_defaults_to_500(self) -> None:
        error = AppError("Something expected went wrong")
        assert error.status_code == 500
        assert error.is_operational is True
