"""
SQLite database integration.

This module resolves the location of the database file
(``get_database_path``), owns a small bounded pool of SQLite
connections (``ConnectionPool``) and creates the schema on application
start (``init_db``).  The schema has no versioning; changes to the
``highscores`` table require a manual migration.

A pooled connection is only ever used by one thread at a time, which is
why connections are opened with ``check_same_thread=False``: FastAPI
runs the sync endpoints on a worker thread pool and a connection may be
handed to a different worker on its next checkout.
"""

import logging
import os
import queue
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings
from .errors import StorageIOFailure, StorageUnavailable, StoreError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS highscores (
    version TEXT NOT NULL,
    score INTEGER NOT NULL,
    name TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_highscores_version_score ON highscores(version, score);
"""

DEMO_RECORD = {"score": 19, "name": "abow", "version": "0.0.1"}


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured path is absolute, use it directly.  Otherwise
    resolve it relative to the installation directory (the
    ``highscore_api`` package directory), so the working directory the
    process was started from does not matter.
    """
    db_url = database_url if database_url is not None else settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # highscore_api/
    return str((base_dir / db_url).resolve())


class ConnectionPool:
    """Bounded pool of SQLite connections with scoped checkout.

    Connections are opened lazily, up to ``size`` of them.  When every
    connection is checked out, ``connection()`` waits up to ``timeout``
    seconds for one to be returned.  The same ``timeout`` is passed to
    SQLite as its busy timeout, so a writer waiting on another writer's
    lock blocks instead of failing straight away.
    """

    def __init__(self, path: str, size: int = 5, timeout: float = 5.0) -> None:
        if size < 1:
            raise ValueError("Pool size must be at least 1")
        self.path = path
        self.size = size
        self.timeout = timeout
        self._idle: "queue.LifoQueue[sqlite3.Connection]" = queue.LifoQueue(maxsize=size)
        self._opened = 0
        self._lock = threading.Lock()

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path, timeout=self.timeout, check_same_thread=False)
        # Return rows as dict‑like objects keyed by column name
        conn.row_factory = sqlite3.Row
        return conn

    def _acquire(self) -> sqlite3.Connection:
        try:
            return self._idle.get_nowait()
        except queue.Empty:
            pass

        with self._lock:
            if self._opened < self.size:
                try:
                    conn = self._open()
                except sqlite3.Error as exc:
                    raise StorageIOFailure(f"Cannot open database {self.path}: {exc}") from exc
                self._opened += 1
                logger.debug("Opened pooled connection %d/%d", self._opened, self.size)
                return conn

        try:
            return self._idle.get(timeout=self.timeout)
        except queue.Empty:
            raise StorageIOFailure(
                f"No database connection available after {self.timeout} seconds"
            ) from None

    def _release(self, conn: sqlite3.Connection) -> None:
        self._idle.put_nowait(conn)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Check out a connection for the duration of a ``with`` block.

        The transaction is committed when the block exits normally and
        rolled back otherwise.  The connection goes back to the pool in
        both cases.  ``sqlite3.Error`` is re-raised as
        ``StorageIOFailure``.
        """
        conn = self._acquire()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StorageIOFailure(str(exc)) from exc
        except BaseException:
            conn.rollback()
            raise
        finally:
            self._release(conn)

    def close(self) -> None:
        """Close every idle connection."""
        with self._lock:
            while True:
                try:
                    conn = self._idle.get_nowait()
                except queue.Empty:
                    break
                conn.close()
                self._opened -= 1
        logger.debug("Connection pool for %s closed", self.path)


def create_pool(database_url: Optional[str] = None) -> ConnectionPool:
    """Build a pool for the configured database using settings defaults."""
    return ConnectionPool(
        get_database_path(database_url),
        size=settings.db_pool_size,
        timeout=settings.db_timeout,
    )


def init_db(pool: ConnectionPool, seed_demo: bool = False) -> None:
    """Create the ``highscores`` table if it does not exist.

    Safe to call any number of times: the schema statements use
    ``IF NOT EXISTS`` and existing rows are left alone.  With
    ``seed_demo`` the demo record is inserted, but only into an empty
    table.  Any failure is raised as ``StorageUnavailable``.
    """
    try:
        with pool.connection() as conn:
            # WAL lets readers proceed while a writer holds the lock.
            conn.execute("PRAGMA journal_mode=WAL")
            conn.executescript(SCHEMA)
            if seed_demo:
                conn.execute(
                    """
                    INSERT INTO highscores (version, score, name)
                    SELECT :version, :score, :name
                    WHERE NOT EXISTS (SELECT 1 FROM highscores)
                    """,
                    DEMO_RECORD,
                )
    except StoreError as exc:
        logger.critical("Cannot initialise database at %s: %s", pool.path, exc)
        raise StorageUnavailable(f"Cannot initialise database at {pool.path}") from exc
    logger.info("Database ready at %s", pool.path)
