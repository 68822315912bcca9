"""
Service layer for highscores.

``HighscoreService`` is the only component that reads or writes the
``highscores`` table.  Records are append-only: there is an insert and
a single parametrised query, and the three read shapes used by the API
(all records, records for one version, top N for one version) are thin
wrappers around that query.

Every call checks a connection out of the pool for the duration of one
statement and returns it afterwards, so nothing is cached between
requests and a committed insert is visible to every later read.  All
statements use bound parameters.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from pydantic import ValidationError

from highscore_api.app.core.db import ConnectionPool
from highscore_api.app.core.errors import StorageIOFailure
from highscore_api.app.schemas.highscore import Highscore

logger = logging.getLogger(__name__)

TOP_TEN = 10


class HighscoreService:
    """Durable, queryable collection of highscore records."""

    def __init__(self, pool: ConnectionPool) -> None:
        self.pool = pool

    def insert(self, highscore: Highscore) -> None:
        """Append one record.

        No deduplication and no comparison with existing scores.  The
        row is committed before this method returns.
        """
        with self.pool.connection() as conn:
            conn.execute(
                "INSERT INTO highscores (version, score, name) VALUES (?, ?, ?)",
                (highscore.version, highscore.score, highscore.name),
            )
        logger.info(
            "Stored highscore %s for %r on version %r",
            highscore.score,
            highscore.name,
            highscore.version,
        )

    def query(
        self,
        version: Optional[str] = None,
        order_by_score: bool = False,
        limit: Optional[int] = None,
    ) -> List[Highscore]:
        """Return records matching ``version``, optionally ranked and capped.

        ``version=None`` matches every record.  Without
        ``order_by_score`` rows come back in insertion order; with it
        they are sorted by score descending, ties in insertion order.
        ``limit`` caps the number of rows; fewer rows than the limit is
        not an error.

        Raises ``StorageIOFailure`` if the query fails or any row cannot
        be decoded into a ``Highscore``.  Partial results are never
        returned.
        """
        if limit is not None and limit < 0:
            raise ValueError("limit must be non-negative")

        sql = "SELECT score, name, version FROM highscores"
        params: list = []
        if version is not None:
            sql += " WHERE version = ?"
            params.append(version)
        if order_by_score:
            sql += " ORDER BY score DESC, rowid ASC"
        else:
            sql += " ORDER BY rowid ASC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        with self.pool.connection() as conn:
            rows = conn.execute(sql, params).fetchall()
        logger.debug("Query %s %s returned %d rows", sql, params, len(rows))
        return [self._row_to_highscore(row) for row in rows]

    def list_all(self) -> List[Highscore]:
        """Return every stored record.

        Reads the whole table; fine for the small tables this service
        is meant for, as there is no pagination.
        """
        return self.query()

    def list_by_version(self, version: str) -> List[Highscore]:
        """Return records whose version equals ``version`` exactly."""
        return self.query(version=version)

    def top_n(self, version: str, n: int = TOP_TEN) -> List[Highscore]:
        """Return up to ``n`` best records for ``version``, best first."""
        return self.query(version=version, order_by_score=True, limit=n)

    @staticmethod
    def _row_to_highscore(row: sqlite3.Row) -> Highscore:
        """Convert a database row to a Highscore schema instance."""
        try:
            return Highscore(score=row["score"], name=row["name"], version=row["version"])
        except ValidationError as exc:
            logger.error("Undecodable highscore row %r: %s", tuple(row), exc)
            raise StorageIOFailure("Stored highscore row could not be decoded") from exc
