"""
Adapter: Artist persistence.

Implements the ArtistRepository port on top of the SQL store.
The MusicBrainz id is the upsert key; slugs are generated once and
never change afterwards.
"""

import logging
from dataclasses import asdict
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.engine import Connection, Engine, RowMapping

from bandpulse.domain.artists.entities import Artist, ArtistAlias, ArtistArea, slugify, utcnow
from bandpulse.domain.artists.ports import ArtistRepository
from bandpulse.infrastructure.database import artists, as_utc

logger = logging.getLogger(__name__)

SLUG_SUFFIX_LEN = 8
# Filled by imports, never by MusicBrainz; None on update keeps the stored value
ENRICHMENT_FIELDS = ("image_url", "genres", "metadata")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _row_to_artist(row: RowMapping) -> Artist:
    area = row["area"]
    return Artist(
        id=row["id"],
        name=row["name"],
        slug=row["slug"],
        mbid=row["mbid"],
        aliases=[ArtistAlias(**alias) for alias in row["aliases"] or []],
        area=ArtistArea(**area) if area else None,
        image_url=row["image_url"],
        genres=row["genres"],
        metadata=row["metadata"],
        fetch_source=row["fetch_source"],
        last_fetched_at=as_utc(row["last_fetched_at"]),
        created_at=as_utc(row["created_at"]),
        updated_at=as_utc(row["updated_at"]),
    )


def _document_fields(artist: Artist) -> dict[str, Any]:
    return {
        "name": artist.name,
        "aliases": [asdict(alias) for alias in artist.aliases],
        "area": asdict(artist.area) if artist.area else None,
        "image_url": artist.image_url,
        "genres": artist.genres,
        "metadata": artist.metadata,
        "fetch_source": artist.fetch_source,
    }


class SqlArtistRepository(ArtistRepository):
    """SQL implementation of the artist repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _find_one(self, conn: Connection, *criteria) -> Optional[Artist]:
        row = conn.execute(select(artists).where(*criteria)).mappings().first()
        return _row_to_artist(row) if row else None

    def find_by_id(self, artist_id: str) -> Optional[Artist]:
        with self._engine.connect() as conn:
            return self._find_one(conn, artists.c.id == artist_id)

    def find_by_ids(self, artist_ids: list[str]) -> list[Artist]:
        if not artist_ids:
            return []
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(artists).where(artists.c.id.in_(artist_ids))
            ).mappings().all()
        return [_row_to_artist(row) for row in rows]

    def search(self, query: str, limit: int = 10) -> list[Artist]:
        """Case-insensitive substring match on the artist name.

        Shorter names come first, so an exact match outranks the
        longer names that merely contain it.
        """
        pattern = f"%{_escape_like(query.strip())}%"
        stmt = (
            select(artists)
            .where(artists.c.name.ilike(pattern, escape="\\"))
            .order_by(func.length(artists.c.name), artists.c.name)
            .limit(limit)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_row_to_artist(row) for row in rows]

    def upsert(self, artist: Artist) -> Artist:
        now = utcnow()
        fields = _document_fields(artist)
        fields["last_fetched_at"] = artist.last_fetched_at or now
        fields["updated_at"] = now

        with self._engine.begin() as conn:
            existing = self._find_one(conn, artists.c.mbid == artist.mbid)
            if existing is not None:
                changes = {
                    name: value
                    for name, value in fields.items()
                    if value is not None or name not in ENRICHMENT_FIELDS
                }
                conn.execute(
                    artists.update().where(artists.c.id == existing.id).values(**changes)
                )
                artist_id = existing.id
            else:
                artist_id = uuid4().hex
                conn.execute(
                    artists.insert().values(
                        id=artist_id,
                        mbid=artist.mbid,
                        slug=self._unique_slug(conn, artist.name, artist.mbid),
                        created_at=now,
                        **fields,
                    )
                )
            stored = self._find_one(conn, artists.c.id == artist_id)

        logger.debug("Artist upserted: mbid=%s, slug=%s", stored.mbid, stored.slug)
        return stored

    def _unique_slug(self, conn: Connection, name: str, mbid: str) -> str:
        """Slug from the name, suffixed with the MBID prefix if already taken."""
        base = slugify(name) or mbid[:SLUG_SUFFIX_LEN]
        if self._find_one(conn, artists.c.slug == base) is None:
            return base
        return f"{base}-{mbid[:SLUG_SUFFIX_LEN]}"
