"""
Admin CLI for the BandPulse store.

Usage:
    # Create tables and constraints
    python -m bandpulse.cli init-db

    # Upsert artists from a JSON list (keyed by MusicBrainz id)
    python -m bandpulse.cli import-artists artists.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from bandpulse.core.config import settings
from bandpulse.domain.artists.entities import Artist, ArtistAlias, ArtistArea
from bandpulse.infrastructure.artists.artist_repository import SqlArtistRepository
from bandpulse.infrastructure.database import get_engine, init_schema
from bandpulse.interfaces.artists.schemas import ArtistAliasSchema, ArtistAreaSchema, CamelModel
from bandpulse.shared.logging import configure_logging

logger = logging.getLogger(__name__)


class ArtistImportRecord(CamelModel):
    """One artist in an import file. Keys are camelCase like the API."""

    mbid: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    aliases: list[ArtistAliasSchema] = Field(default_factory=list)
    area: Optional[ArtistAreaSchema] = None
    image_url: Optional[str] = None
    genres: Optional[list[str]] = None
    metadata: Optional[dict[str, Any]] = None
    fetch_source: str = "import"

    def to_artist(self) -> Artist:
        return Artist(
            name=self.name,
            slug="",
            mbid=self.mbid,
            aliases=[ArtistAlias(**alias.model_dump()) for alias in self.aliases],
            area=ArtistArea(**self.area.model_dump()) if self.area else None,
            image_url=self.image_url,
            genres=self.genres,
            metadata=self.metadata,
            fetch_source=self.fetch_source,
        )


_records_adapter = TypeAdapter(list[ArtistImportRecord])


def load_import_file(path: Path) -> list[ArtistImportRecord]:
    """Parse and validate an import file.

    Raises:
        ValidationError: If any record is malformed.
    """
    with path.open(encoding="utf-8") as fh:
        return _records_adapter.validate_python(json.load(fh))


def cmd_init_db(_args: argparse.Namespace) -> None:
    """Create missing tables."""
    init_schema(get_engine())


def cmd_import_artists(args: argparse.Namespace) -> None:
    """Upsert every artist of an import file."""
    try:
        records = load_import_file(args.path)
    except ValidationError as exc:
        logger.error("Invalid import file %s:\n%s", args.path, exc)
        sys.exit(1)

    engine = get_engine()
    init_schema(engine)
    repo = SqlArtistRepository(engine)
    for record in records:
        artist = repo.upsert(record.to_artist())
        logger.info("Imported %s (%s) as %s", artist.name, artist.mbid, artist.slug)

    logger.info("Import complete: %d artists.", len(records))


def main(argv: Optional[list[str]] = None) -> None:
    configure_logging(settings.log_level)

    parser = argparse.ArgumentParser(prog="bandpulse", description="BandPulse admin CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create tables")
    init_parser.set_defaults(func=cmd_init_db)

    import_parser = subparsers.add_parser("import-artists", help="Upsert artists from JSON")
    import_parser.add_argument("path", type=Path, help="JSON file holding a list of artists")
    import_parser.set_defaults(func=cmd_import_artists)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
