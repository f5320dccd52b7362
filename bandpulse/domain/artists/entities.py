"""
Domain entities for the artists bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

DEFAULT_NOTIFICATIONS_ENABLED = True
SLUG_MAX_LEN = 100


@dataclass(frozen=True)
class ArtistAlias:
    """Alternative name of an artist, e.g. "RHCP" for Red Hot Chili Peppers."""

    name: str
    sort_name: Optional[str] = None
    locale: Optional[str] = None
    primary: Optional[bool] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class ArtistArea:
    """Country or region an artist comes from."""

    name: str
    iso_3166_1: Optional[str] = None


@dataclass
class Artist:
    """An artist as persisted in the store.

    The MusicBrainz id (``mbid``) is the canonical, stable identity of an
    artist. ``id`` is the store's own identifier and is what API clients
    see. ``mbid``, ``fetch_source`` and the timestamps are internal.
    """

    name: str
    slug: str
    mbid: str
    aliases: list[ArtistAlias] = field(default_factory=list)
    area: Optional[ArtistArea] = None
    image_url: Optional[str] = None
    genres: Optional[list[str]] = None
    metadata: Optional[dict[str, Any]] = None
    fetch_source: str = "musicbrainz"
    last_fetched_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    id: Optional[str] = None


@dataclass
class Follow:
    """A user following an artist.

    At most one Follow exists per (user_id, artist_id). ``followed_at``
    never changes after creation; only ``notifications_enabled`` may be
    toggled, and only by the owning user.
    """

    user_id: str
    artist_id: str
    followed_at: datetime
    notifications_enabled: bool
    id: Optional[int] = None


@dataclass(frozen=True)
class FollowCreateOptions:
    """Input for creating a follow. Never persisted itself."""

    user_id: str
    artist_id: str
    notifications_enabled: bool = DEFAULT_NOTIFICATIONS_ENABLED


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_follow(options: FollowCreateOptions, followed_at: Optional[datetime] = None) -> Follow:
    """Build an unsaved Follow from creation options.

    Args:
        options: Who follows whom, and the initial notification flag.
        followed_at: Creation time. Defaults to the current UTC time.

    Returns:
        A Follow with ``id`` unset.
    """
    return Follow(
        user_id=options.user_id,
        artist_id=options.artist_id,
        followed_at=followed_at or utcnow(),
        notifications_enabled=options.notifications_enabled,
    )


_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Turn an artist name into a URL-friendly slug.

    >>> slugify("Sigur Rós")
    'sigur-ros'
    """
    ascii_name = (
        unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    )
    return _NON_ALNUM.sub("-", ascii_name.lower()).strip("-")[:SLUG_MAX_LEN].rstrip("-")


def is_cache_valid(
    artist: Artist, ttl_seconds: int, now: Optional[datetime] = None
) -> bool:
    """True while ``last_fetched_at + ttl`` lies in the future.

    Artists that were never fetched are always stale.
    """
    if artist.last_fetched_at is None:
        return False
    age = (now or utcnow()) - artist.last_fetched_at
    return age < timedelta(seconds=ttl_seconds)
