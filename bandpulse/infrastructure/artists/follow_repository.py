"""
Adapter: Follow persistence.

Implements the FollowRepository port on top of the SQL store.
Duplicate follows are rejected by the uq_follows_user_artist
constraint; the resulting IntegrityError becomes AlreadyFollowingError.
Other integrity violations (an artist deleted mid-request) propagate.
No caching: follows are always read fresh.
"""

import logging
from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import IntegrityError

from bandpulse.domain.artists.entities import Follow, FollowCreateOptions, new_follow
from bandpulse.domain.artists.errors import AlreadyFollowingError
from bandpulse.domain.artists.ports import FollowRepository
from bandpulse.infrastructure.database import as_utc, follows

logger = logging.getLogger(__name__)


def _row_to_follow(row: RowMapping) -> Follow:
    return Follow(
        id=row["id"],
        user_id=row["user_id"],
        artist_id=row["artist_id"],
        followed_at=as_utc(row["followed_at"]),
        notifications_enabled=row["notifications_enabled"],
    )


def _pair(user_id: str, artist_id: str):
    return and_(follows.c.user_id == user_id, follows.c.artist_id == artist_id)


class SqlFollowRepository(FollowRepository):
    """SQL implementation of the follow repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, options: FollowCreateOptions) -> Follow:
        follow = new_follow(options)
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    follows.insert().values(
                        user_id=follow.user_id,
                        artist_id=follow.artist_id,
                        followed_at=follow.followed_at,
                        notifications_enabled=follow.notifications_enabled,
                    )
                )
        except IntegrityError as exc:
            # Only the uq_follows_user_artist violation means "already following"
            if self.exists(options.user_id, options.artist_id):
                raise AlreadyFollowingError(options.user_id, options.artist_id) from exc
            raise

        follow.id = result.inserted_primary_key[0]
        logger.debug(
            "Follow created: user_id=%s, artist_id=%s", options.user_id, options.artist_id
        )
        return follow

    def delete(self, user_id: str, artist_id: str) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(follows.delete().where(_pair(user_id, artist_id)))
        deleted = result.rowcount > 0
        if deleted:
            logger.debug("Follow deleted: user_id=%s, artist_id=%s", user_id, artist_id)
        return deleted

    def exists(self, user_id: str, artist_id: str) -> bool:
        return self.find_one(user_id, artist_id) is not None

    def find_one(self, user_id: str, artist_id: str) -> Optional[Follow]:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(follows).where(_pair(user_id, artist_id))
            ).mappings().first()
        return _row_to_follow(row) if row else None

    def list_by_user(self, user_id: str) -> list[Follow]:
        stmt = (
            select(follows)
            .where(follows.c.user_id == user_id)
            .order_by(follows.c.followed_at.desc(), follows.c.id.desc())
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_row_to_follow(row) for row in rows]

    def follower_count(self, artist_id: str) -> int:
        stmt = select(func.count()).select_from(follows).where(follows.c.artist_id == artist_id)
        with self._engine.connect() as conn:
            return conn.execute(stmt).scalar_one()

    def update_notification_preference(
        self, user_id: str, artist_id: str, enabled: bool
    ) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(
                follows.update()
                .where(_pair(user_id, artist_id))
                .values(notifications_enabled=enabled)
            )
        return result.rowcount > 0

    def check_multiple(self, user_id: str, artist_ids: list[str]) -> dict[str, bool]:
        if not artist_ids:
            return {}
        stmt = select(follows.c.artist_id).where(
            follows.c.user_id == user_id, follows.c.artist_id.in_(artist_ids)
        )
        with self._engine.connect() as conn:
            followed = set(conn.execute(stmt).scalars())
        return {artist_id: artist_id in followed for artist_id in artist_ids}
