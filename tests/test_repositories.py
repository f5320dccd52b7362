"""
Tests for the SQL repository adapters.

Runs against the shared in-memory SQLite store from conftest.
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError

from bandpulse.domain.artists.entities import Artist, FollowCreateOptions, utcnow
from bandpulse.domain.artists.errors import AlreadyFollowingError
from bandpulse.infrastructure.database import ping

MBID_A = "a74b1b7f-71a5-4011-9441-d0b5e4122711"
MBID_B = "b10bbbfc-cf9e-42e0-be17-e2c3e1d2600d"
MBID_C = "9c9f1380-2516-4fc9-a3e6-f9f61941d090"


class TestArtistRepository:
    """Tests for SqlArtistRepository."""

    def test_upsert_assigns_id_and_slug(self, make_artist) -> None:
        artist = make_artist(name="Sigur Rós", mbid=MBID_A)

        assert artist.id is not None
        assert artist.slug == "sigur-ros"
        assert artist.created_at is not None
        assert artist.created_at.tzinfo is not None

    def test_slug_collision_gets_mbid_suffix(self, make_artist) -> None:
        first = make_artist(name="Nirvana", mbid=MBID_A)
        second = make_artist(name="Nirvana", mbid=MBID_B)

        assert first.slug == "nirvana"
        assert second.slug == "nirvana-b10bbbfc"

    def test_upsert_by_mbid_updates_in_place(self, make_artist, artist_repo) -> None:
        original = make_artist(name="Radiohead", mbid=MBID_A)

        updated = artist_repo.upsert(
            Artist(name="Radiohead (UK)", slug="", mbid=MBID_A, genres=["rock"])
        )

        assert updated.id == original.id
        assert updated.slug == original.slug
        assert updated.name == "Radiohead (UK)"
        assert updated.genres == ["rock"]
        assert updated.created_at == original.created_at

    def test_refresh_keeps_stored_enrichment(self, make_artist, artist_repo) -> None:
        """An identity-only update leaves image, genres and metadata alone."""
        original = make_artist(
            name="Low",
            mbid=MBID_A,
            image_url="https://img.example/low.jpg",
            genres=["slowcore"],
            metadata={"type": "Group"},
        )

        refreshed = artist_repo.upsert(
            Artist(name="Low", slug="", mbid=MBID_A, fetch_source="musicbrainz")
        )

        assert refreshed.id == original.id
        assert refreshed.image_url == "https://img.example/low.jpg"
        assert refreshed.genres == ["slowcore"]
        assert refreshed.metadata == {"type": "Group"}
        assert refreshed.fetch_source == "musicbrainz"
        assert refreshed.last_fetched_at >= original.last_fetched_at

    def test_round_trips_document_fields(self, make_artist, artist_repo) -> None:
        stored = make_artist(name="Björk", mbid=MBID_A, metadata={"type": "Person"})

        found = artist_repo.find_by_id(stored.id)

        assert found.area.iso_3166_1 == "GB"
        assert found.aliases[0].name == "BJÖRK"
        assert found.metadata == {"type": "Person"}

    def test_find_by_id_missing(self, artist_repo) -> None:
        assert artist_repo.find_by_id("does-not-exist") is None

    def test_find_by_ids(self, make_artist, artist_repo) -> None:
        a = make_artist(name="Low", mbid=MBID_A)
        b = make_artist(name="Slint", mbid=MBID_B)

        found = artist_repo.find_by_ids([a.id, b.id, "ghost"])

        assert {artist.id for artist in found} == {a.id, b.id}
        assert artist_repo.find_by_ids([]) == []

    def test_search_is_case_insensitive_and_ranks_shorter_first(
        self, make_artist, artist_repo
    ) -> None:
        make_artist(name="The Cure Tribute Band", mbid=MBID_A)
        make_artist(name="The Cure", mbid=MBID_B)
        make_artist(name="Slowdive", mbid=MBID_C)

        results = artist_repo.search("cURe")

        assert [artist.name for artist in results] == ["The Cure", "The Cure Tribute Band"]

    def test_search_respects_limit(self, make_artist, artist_repo) -> None:
        make_artist(name="Boards of Canada", mbid=MBID_A)
        make_artist(name="Boredoms", mbid=MBID_B)

        assert len(artist_repo.search("bo", limit=1)) == 1

    def test_search_treats_wildcards_literally(self, make_artist, artist_repo) -> None:
        make_artist(name="Godspeed You! Black Emperor", mbid=MBID_A)

        assert artist_repo.search("%") == []
        assert artist_repo.search("_") == []


class TestFollowRepository:
    """Tests for SqlFollowRepository."""

    def test_create_and_find(self, make_artist, follow_repo) -> None:
        artist = make_artist()

        follow = follow_repo.create(FollowCreateOptions(user_id="u1", artist_id=artist.id))

        assert follow.id is not None
        assert follow.notifications_enabled is True
        found = follow_repo.find_one("u1", artist.id)
        assert found.id == follow.id
        assert found.followed_at.tzinfo is not None
        assert follow_repo.exists("u1", artist.id) is True

    def test_duplicate_follow_is_rejected_by_store(self, make_artist, follow_repo) -> None:
        artist = make_artist()
        follow_repo.create(FollowCreateOptions(user_id="u1", artist_id=artist.id))

        with pytest.raises(AlreadyFollowingError):
            follow_repo.create(FollowCreateOptions(user_id="u1", artist_id=artist.id))

        assert follow_repo.follower_count(artist.id) == 1

    def test_unknown_artist_is_not_reported_as_duplicate(self, follow_repo) -> None:
        """A foreign-key violation propagates instead of AlreadyFollowingError."""
        with pytest.raises(IntegrityError):
            follow_repo.create(FollowCreateOptions(user_id="u1", artist_id="ghost"))

        assert follow_repo.exists("u1", "ghost") is False

    def test_same_artist_different_users(self, make_artist, follow_repo) -> None:
        artist = make_artist()
        follow_repo.create(FollowCreateOptions(user_id="u1", artist_id=artist.id))
        follow_repo.create(FollowCreateOptions(user_id="u2", artist_id=artist.id))

        assert follow_repo.follower_count(artist.id) == 2

    def test_delete(self, make_artist, follow_repo) -> None:
        artist = make_artist()
        follow_repo.create(FollowCreateOptions(user_id="u1", artist_id=artist.id))

        assert follow_repo.delete("u1", artist.id) is True
        assert follow_repo.delete("u1", artist.id) is False
        assert follow_repo.exists("u1", artist.id) is False

    def test_list_by_user_most_recent_first(self, make_artist, follow_repo) -> None:
        older = make_artist(name="Can", mbid=MBID_A)
        newer = make_artist(name="Neu!", mbid=MBID_B)
        now = utcnow()

        with patch(
            "bandpulse.domain.artists.entities.utcnow",
            side_effect=[now - timedelta(days=1), now],
        ):
            follow_repo.create(FollowCreateOptions(user_id="u1", artist_id=older.id))
            follow_repo.create(FollowCreateOptions(user_id="u1", artist_id=newer.id))
        follow_repo.create(FollowCreateOptions(user_id="u2", artist_id=older.id))

        follows = follow_repo.list_by_user("u1")

        assert [f.artist_id for f in follows] == [newer.id, older.id]

    def test_update_notification_preference(self, make_artist, follow_repo) -> None:
        artist = make_artist()
        follow_repo.create(FollowCreateOptions(user_id="u1", artist_id=artist.id))

        assert follow_repo.update_notification_preference("u1", artist.id, False) is True
        assert follow_repo.find_one("u1", artist.id).notifications_enabled is False
        assert follow_repo.update_notification_preference("u2", artist.id, False) is False

    def test_check_multiple(self, make_artist, follow_repo) -> None:
        a = make_artist(name="Low", mbid=MBID_A)
        b = make_artist(name="Slint", mbid=MBID_B)
        follow_repo.create(FollowCreateOptions(user_id="u1", artist_id=a.id))

        status = follow_repo.check_multiple("u1", [a.id, b.id])

        assert status == {a.id: True, b.id: False}
        assert follow_repo.check_multiple("u1", []) == {}


class TestDatabase:
    def test_ping(self, engine) -> None:
        ping(engine)
