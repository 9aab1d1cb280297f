"""Tenant database handles: local SQLite (aiosqlite) or remote libSQL."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import aiosqlite

from ansiversa_db.config import DatabaseConnectionConfig

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("libsql://", "https://", "http://", "wss://", "ws://")

# ---------------------------------------------------------------------------
# Result wrapper
# ---------------------------------------------------------------------------

class Result:
    """Rows plus mutation metadata returned by ``Database.execute()``."""
    __slots__ = ("rows", "rowcount", "lastrowid")

    def __init__(self, rows: List[Dict[str, Any]], rowcount: int, lastrowid: Optional[int]):
        self.rows = rows
        self.rowcount = rowcount
        self.lastrowid = lastrowid


# ---------------------------------------------------------------------------
# Database wrappers
# ---------------------------------------------------------------------------

class Database:
    """Positional-argument SQL execution against one tenant database."""

    async def execute(self, query: str, args: Sequence[Any] = ()) -> Result:
        raise NotImplementedError

    async def fetch_one(self, query: str, args: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        """Fetch a single row as a dict, or None."""
        result = await self.execute(query, args)
        return result.rows[0] if result.rows else None

    async def fetch_all(self, query: str, args: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Fetch all rows as a list of dicts."""
        result = await self.execute(query, args)
        return result.rows

    async def close(self) -> None:
        raise NotImplementedError


def _sqlite_target(url: str) -> Tuple[str, bool]:
    """Translate a local database URL into an sqlite3 target and uri flag."""
    if url.startswith("file:"):
        return url, True
    if url.startswith("sqlite:///"):
        return url[len("sqlite:///"):], False
    return url, False


class SQLiteDatabase(Database):
    """aiosqlite connection in autocommit mode with foreign keys enforced.

    The connection is opened on the first statement, so building the handle
    never suspends.
    """

    def __init__(self, url: str):
        self.url = url
        self._target, self._uri = _sqlite_target(url)
        self._conn: Optional[aiosqlite.Connection] = None
        self._lock: Optional[asyncio.Lock] = None

    async def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            # Created here so it belongs to the loop that first uses the handle.
            if self._lock is None:
                self._lock = asyncio.Lock()
            async with self._lock:
                if self._conn is None:
                    conn = await aiosqlite.connect(
                        self._target, uri=self._uri, isolation_level=None
                    )
                    conn.row_factory = aiosqlite.Row
                    await conn.execute("PRAGMA foreign_keys = ON")
                    self._conn = conn
                    logger.info("SQLite connection opened: %s", self.url)
        return self._conn

    async def execute(self, query: str, args: Sequence[Any] = ()) -> Result:
        conn = await self._connection()
        async with conn.execute(query, tuple(args)) as cursor:
            rows = await cursor.fetchall()
            return Result(
                rows=[dict(row) for row in rows],
                rowcount=cursor.rowcount,
                lastrowid=cursor.lastrowid,
            )

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite connection closed: %s", self.url)


class LibsqlDatabase(Database):
    """Remote libSQL/Turso database over ``libsql-client``."""

    def __init__(self, url: str, auth_token: Optional[str]):
        import libsql_client

        self.url = url
        self._client = libsql_client.create_client(url, auth_token=auth_token)

    async def execute(self, query: str, args: Sequence[Any] = ()) -> Result:
        result_set = await self._client.execute(query, list(args))
        columns = list(result_set.columns)
        return Result(
            rows=[dict(zip(columns, row)) for row in result_set.rows],
            rowcount=result_set.rows_affected,
            lastrowid=result_set.last_insert_rowid,
        )

    async def close(self) -> None:
        await self._client.close()
        logger.info("libSQL client closed: %s", self.url)


def is_remote_url(url: str) -> bool:
    return url.startswith(REMOTE_SCHEMES)


def connect(config: DatabaseConnectionConfig) -> Database:
    """Build a handle for ``config``. Never performs I/O."""
    if is_remote_url(config.url):
        logger.info("libSQL client created: %s", config.url)
        return LibsqlDatabase(config.url, config.auth_token)
    return SQLiteDatabase(config.url)
