"""
Pytest configuration and shared fixtures.

Environment variables are set before any bandpulse import, because
settings are loaded once at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET"] = "test-secret-test-secret-test-secret"

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from bandpulse.core.config import settings
from bandpulse.domain.artists.entities import Artist, ArtistAlias, ArtistArea
from bandpulse.domain.artists.ports import MusicBrainzClient
from bandpulse.infrastructure.artists.artist_repository import SqlArtistRepository
from bandpulse.infrastructure.artists.follow_repository import SqlFollowRepository
from bandpulse.infrastructure.database import get_engine, metadata


def make_token(user_id: str = "user-1", email: str = "fan@example.com") -> str:
    """Mint a bearer token the API accepts."""
    return jwt.encode(
        {"userId": user_id, "email": email},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


@pytest.fixture
def engine():
    """The shared in-memory store, emptied before each test."""
    engine = get_engine()
    metadata.drop_all(engine)
    metadata.create_all(engine)
    return engine


@pytest.fixture
def artist_repo(engine) -> SqlArtistRepository:
    return SqlArtistRepository(engine)


@pytest.fixture
def follow_repo(engine) -> SqlFollowRepository:
    return SqlFollowRepository(engine)


@pytest.fixture
def make_artist(artist_repo):
    """Factory storing an artist and returning it with its id."""

    def _make(
        name: str = "Radiohead", mbid: str = "a74b1b7f-71a5-4011-9441-d0b5e4122711", **kwargs
    ) -> Artist:
        kwargs.setdefault("aliases", [ArtistAlias(name=name.upper(), primary=True)])
        kwargs.setdefault("area", ArtistArea(name="United Kingdom", iso_3166_1="GB"))
        return artist_repo.upsert(Artist(name=name, slug="", mbid=mbid, **kwargs))

    return _make


@pytest.fixture
def musicbrainz() -> MagicMock:
    """MusicBrainz port stub. Finds nothing unless a test says otherwise."""
    client = MagicMock(spec=MusicBrainzClient)
    client.search_artists.return_value = []
    client.get_artist.return_value = None
    return client


@pytest.fixture
def client(engine, musicbrainz):
    """Test client for the real app, with MusicBrainz stubbed out."""
    from bandpulse.interfaces.artists.dependencies import get_musicbrainz_client
    from bandpulse.main import app

    app.dependency_overrides[get_musicbrainz_client] = lambda: musicbrainz
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def headers_for():
    """Factory for Authorization headers of an arbitrary user."""

    def _headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id=user_id)}"}

    return _headers
