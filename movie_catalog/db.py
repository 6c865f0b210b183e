from __future__ import annotations

import sqlite3
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Sequence, Tuple
from urllib.parse import urlparse

from movie_catalog.schema import get_schema_sql


def _debug(msg: str) -> None:
    print(f"[db] {msg}")


class StoreUnavailable(RuntimeError):
    """The data store could not be reached (connection failed).

    Surfaced to clients as a server-side failure, never as an auth failure.
    No retries happen at this layer.
    """


def integrity_errors() -> Tuple[type, ...]:
    """Driver exception types raised when a UNIQUE or FOREIGN KEY constraint fails."""
    errs: List[type] = [sqlite3.IntegrityError]
    # psycopg2 is only loaded once a Postgres DSN has been opened.
    pg = sys.modules.get("psycopg2")
    if pg is not None:
        errs.append(pg.IntegrityError)
    return tuple(errs)


def _detect_dialect(dsn: str) -> str:
    """Return 'postgres' or 'sqlite'."""
    s = (dsn or "").strip()
    if not s:
        return "sqlite"
    try:
        scheme = urlparse(s).scheme.lower()
    except ValueError:
        scheme = ""
    if scheme in ("postgres", "postgresql"):
        return "postgres"
    return "sqlite"


def _qmark_to_pct(sql: str) -> str:
    """Convert SQLite qmark placeholders (?) to psycopg2 placeholders (%s).

    Skips '?' inside single/double-quoted string literals. Not a full SQL
    parser, but sufficient for the statements in this codebase.
    """
    out: List[str] = []
    in_single = False
    in_double = False
    for ch in sql:
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == "?" and not in_single and not in_double:
            out.append("%s")
            continue
        out.append(ch)
    return "".join(out)


class PGCursor:
    def __init__(self, cur: Any):
        self._cur = cur

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> "PGCursor":
        self._cur.execute(_qmark_to_pct(sql), tuple(params or ()))
        return self

    def executemany(self, sql: str, seq_of_params: Sequence[Sequence[Any]]) -> "PGCursor":
        self._cur.executemany(_qmark_to_pct(sql), [tuple(x) for x in seq_of_params])
        return self

    def fetchone(self) -> Any:
        return self._cur.fetchone()

    def fetchall(self) -> Any:
        return self._cur.fetchall()

    @property
    def rowcount(self) -> int:
        return int(self._cur.rowcount or 0)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._cur, name)


class PGConnection:
    """A tiny adapter that makes psycopg2 connections look like sqlite3 connections."""

    dialect = "postgres"

    def __init__(self, conn: Any):
        self._conn = conn

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> PGCursor:
        wrapper = PGCursor(self._conn.cursor())
        wrapper.execute(sql, params)
        return wrapper

    def executemany(self, sql: str, seq_of_params: Sequence[Sequence[Any]]) -> PGCursor:
        wrapper = PGCursor(self._conn.cursor())
        wrapper.executemany(sql, seq_of_params)
        return wrapper

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def close(self) -> None:
        self._conn.close()


def _open_postgres(dsn: str) -> PGConnection:
    try:
        import psycopg2
        import psycopg2.extras
    except ImportError as e:
        raise RuntimeError(
            "Postgres selected but psycopg2 is not installed. "
            "Install psycopg2-binary and try again."
        ) from e

    try:
        # RealDictCursor makes fetchone()/fetchall() rows act like dicts.
        raw = psycopg2.connect(dsn, cursor_factory=psycopg2.extras.RealDictCursor)
    except psycopg2.OperationalError as e:
        _debug(f"Postgres connection failed: {e}")
        raise StoreUnavailable("store_unavailable") from e
    return PGConnection(raw)


def _open_sqlite(dsn: str) -> sqlite3.Connection:
    # Support sqlite:///path style
    if dsn.lower().startswith("sqlite:///"):
        dsn = dsn[len("sqlite:///") :]

    try:
        Path(dsn).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(dsn, timeout=30, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        # Concurrency pragmas (safe defaults for API + scripts sharing a file)
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.execute("PRAGMA busy_timeout=5000;")  # 5s
        conn.execute("PRAGMA foreign_keys = ON;")
    except (sqlite3.DatabaseError, OSError) as e:
        _debug(f"SQLite open failed for {dsn}: {e}")
        raise StoreUnavailable("store_unavailable") from e
    return conn


@contextmanager
def connect(db_dsn: str) -> Iterator[Any]:
    """Connect to SQLite or Postgres with sensible defaults.

    - SQLite: uses WAL + NORMAL sync, rows are sqlite3.Row.
    - Postgres: uses psycopg2 (RealDictCursor) so rows behave like dicts.

    Commits on clean exit, rolls back on error. Raises StoreUnavailable if the
    connection itself cannot be opened.
    """
    dsn = (db_dsn or "").strip()
    if _detect_dialect(dsn) == "postgres":
        conn: Any = _open_postgres(dsn)
    else:
        conn = _open_sqlite(dsn)

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_dsn: str) -> None:
    """Create all tables (idempotent)."""
    dialect = _detect_dialect(db_dsn)
    _debug(f"Initializing DB ({dialect}) at {db_dsn}")
    with connect(db_dsn) as conn:
        ddl = get_schema_sql(dialect)
        if dialect == "postgres":
            # Execute multi-statement DDL (naive split is OK for our schema)
            for stmt in [s.strip() for s in ddl.split(";") if s.strip()]:
                conn.execute(stmt)
            return

        # SQLite can run it in one go
        conn.executescript(ddl)

