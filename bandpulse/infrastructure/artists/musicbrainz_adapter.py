"""
Adapter: MusicBrainz web service.

Implements the MusicBrainzClient port over the MusicBrainz JSON API (v2).
MusicBrainz blocks clients that exceed one request per second and
requires a descriptive User-Agent, so every call goes through a
process-wide throttle and carries the configured agent string.
Only identity data is extracted: name, aliases and area.
"""

import logging
import threading
import time
from typing import Any, Optional

import httpx

from bandpulse.domain.artists.entities import Artist, ArtistAlias, ArtistArea
from bandpulse.domain.artists.errors import MusicBrainzUnavailableError
from bandpulse.domain.artists.ports import MusicBrainzClient

logger = logging.getLogger(__name__)

MAX_SEARCH_LIMIT = 100


def _to_artist(raw: dict[str, Any]) -> Artist:
    """Normalize a raw MusicBrainz artist into an unsaved Artist."""
    area = None
    if raw.get("area"):
        codes = raw["area"].get("iso-3166-1-codes") or []
        area = ArtistArea(name=raw["area"]["name"], iso_3166_1=codes[0] if codes else None)

    return Artist(
        name=raw["name"],
        slug="",
        mbid=raw["id"],
        aliases=[
            ArtistAlias(
                name=alias["name"],
                sort_name=alias.get("sort-name"),
                locale=alias.get("locale"),
                primary=alias.get("primary"),
                type=alias.get("type"),
            )
            for alias in raw.get("aliases") or []
        ],
        area=area,
        fetch_source="musicbrainz",
    )


class HttpMusicBrainzClient(MusicBrainzClient):
    """httpx implementation of the MusicBrainz port.

    Args:
        base_url: Root of the web service, e.g. ``https://musicbrainz.org/ws/2``.
        user_agent: Value of the mandatory User-Agent header.
        timeout: Per-request timeout in seconds.
        min_interval: Minimum seconds between two requests.
        transport: Optional httpx transport, used to stub the network.
    """

    def __init__(
        self,
        base_url: str,
        user_agent: str,
        timeout: float = 10.0,
        min_interval: float = 1.1,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )
        self._min_interval = min_interval
        self._throttle = threading.Lock()
        self._last_request = 0.0

    def _wait_for_slot(self) -> None:
        with self._throttle:
            wait = self._min_interval - (time.monotonic() - self._last_request)
            if wait > 0:
                time.sleep(wait)
            self._last_request = time.monotonic()

    def _get(self, path: str, params: dict[str, Any]) -> httpx.Response:
        self._wait_for_slot()
        try:
            return self._client.get(path, params={**params, "fmt": "json"})
        except httpx.HTTPError as exc:
            logger.error("MusicBrainz request failed: path=%s, error=%s", path, exc)
            raise MusicBrainzUnavailableError(f"MusicBrainz request failed: {exc}") from exc

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MusicBrainzUnavailableError("MusicBrainz returned invalid JSON") from exc

    def search_artists(self, query: str, limit: int = 10) -> list[Artist]:
        response = self._get(
            "/artist", {"query": query, "limit": min(limit, MAX_SEARCH_LIMIT)}
        )
        if response.is_error:
            logger.error(
                "MusicBrainz search failed: query=%r, status=%d", query, response.status_code
            )
            raise MusicBrainzUnavailableError(
                f"MusicBrainz search failed with status {response.status_code}"
            )

        payload = self._json(response)
        artists = [_to_artist(raw) for raw in payload.get("artists", [])]
        logger.info(
            "MusicBrainz search completed: query=%r, total=%s, returned=%d",
            query,
            payload.get("count"),
            len(artists),
        )
        return artists

    def get_artist(self, mbid: str) -> Optional[Artist]:
        response = self._get(f"/artist/{mbid}", {"inc": "aliases"})
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.warning("MusicBrainz artist not found: mbid=%s", mbid)
            return None
        if response.is_error:
            logger.error(
                "MusicBrainz lookup failed: mbid=%s, status=%d", mbid, response.status_code
            )
            raise MusicBrainzUnavailableError(
                f"MusicBrainz lookup failed with status {response.status_code}"
            )

        artist = _to_artist(self._json(response))
        logger.info("MusicBrainz lookup completed: mbid=%s, name=%s", mbid, artist.name)
        return artist

    def close(self) -> None:
        self._client.close()
