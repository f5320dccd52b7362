"""
Tests for the MusicBrainz adapter.

The network is replaced by an httpx MockTransport; requests are
recorded so the query string and headers can be checked.
"""

import httpx
import pytest

from bandpulse.domain.artists.errors import MusicBrainzUnavailableError
from bandpulse.infrastructure.artists.musicbrainz_adapter import HttpMusicBrainzClient

USER_AGENT = "BandPulse-Tests/1.0 (tests@example.com)"

RADIOHEAD = {
    "id": "a74b1b7f-71a5-4011-9441-d0b5e4122711",
    "name": "Radiohead",
    "sort-name": "Radiohead",
    "type": "Group",
    "country": "GB",
    "area": {"id": "8a754a16", "name": "United Kingdom", "iso-3166-1-codes": ["GB"]},
    "aliases": [{"name": "On a Friday", "sort-name": "On a Friday", "primary": None}],
    "score": 100,
}


def _client(handler, requests: list) -> HttpMusicBrainzClient:
    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return HttpMusicBrainzClient(
        base_url="https://musicbrainz.test/ws/2",
        user_agent=USER_AGENT,
        min_interval=0,
        transport=httpx.MockTransport(record),
    )


class TestSearchArtists:
    """Tests for HttpMusicBrainzClient.search_artists."""

    def test_normalizes_results(self) -> None:
        requests: list = []
        client = _client(
            lambda r: httpx.Response(200, json={"count": 1, "artists": [RADIOHEAD]}), requests
        )

        (artist,) = client.search_artists("radiohead", limit=5)

        assert artist.mbid == RADIOHEAD["id"]
        assert artist.name == "Radiohead"
        assert artist.slug == ""
        assert artist.id is None
        assert artist.area.name == "United Kingdom"
        assert artist.area.iso_3166_1 == "GB"
        assert artist.aliases[0].sort_name == "On a Friday"
        assert artist.fetch_source == "musicbrainz"

    def test_request_shape(self) -> None:
        requests: list = []
        client = _client(lambda r: httpx.Response(200, json={"artists": []}), requests)

        client.search_artists("sigur rós", limit=500)

        (request,) = requests
        assert request.url.path == "/ws/2/artist"
        assert request.url.params["query"] == "sigur rós"
        assert request.url.params["limit"] == "100"
        assert request.url.params["fmt"] == "json"
        assert request.headers["user-agent"] == USER_AGENT
        assert request.headers["accept"] == "application/json"

    def test_server_error_raises(self) -> None:
        client = _client(lambda r: httpx.Response(503), [])

        with pytest.raises(MusicBrainzUnavailableError):
            client.search_artists("radiohead")

    def test_network_error_raises(self) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(fail, [])

        with pytest.raises(MusicBrainzUnavailableError):
            client.search_artists("radiohead")

    def test_invalid_json_raises(self) -> None:
        client = _client(lambda r: httpx.Response(200, content=b"<html>"), [])

        with pytest.raises(MusicBrainzUnavailableError):
            client.search_artists("radiohead")


class TestGetArtist:
    """Tests for HttpMusicBrainzClient.get_artist."""

    def test_lookup_includes_aliases(self) -> None:
        requests: list = []
        client = _client(lambda r: httpx.Response(200, json=RADIOHEAD), requests)

        artist = client.get_artist(RADIOHEAD["id"])

        assert artist.name == "Radiohead"
        (request,) = requests
        assert request.url.path == f"/ws/2/artist/{RADIOHEAD['id']}"
        assert request.url.params["inc"] == "aliases"

    def test_unknown_mbid_returns_none(self) -> None:
        client = _client(lambda r: httpx.Response(404, json={"error": "Not Found"}), [])

        assert client.get_artist("00000000-0000-0000-0000-000000000000") is None

    def test_server_error_raises(self) -> None:
        client = _client(lambda r: httpx.Response(500), [])

        with pytest.raises(MusicBrainzUnavailableError):
            client.get_artist(RADIOHEAD["id"])

    def test_artist_without_area(self) -> None:
        raw = {"id": "m1", "name": "Anonymous"}
        client = _client(lambda r: httpx.Response(200, json=raw), [])

        artist = client.get_artist("m1")

        assert artist.area is None
        assert artist.aliases == []
