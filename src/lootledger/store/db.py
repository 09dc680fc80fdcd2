"""Database engine with single-writer transactions.

This module provides:
- Database: Connection manager with WAL mode for concurrent access
- immediate_transaction: BEGIN IMMEDIATE sessions that serialize writers
- Retry logic for SQLite busy timeout handling

Every mutating operation (import, assign, undo, manual edit, week changes,
roster writes) runs inside immediate_transaction so its read-modify-write of
a member record and the ledger commit together or not at all. Reads use
plain sessions and never block writers under WAL.
"""

from __future__ import annotations

import time
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import event, text
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, SQLModel, create_engine

# Registers the tables on SQLModel.metadata
from lootledger.store import models as _models  # noqa: F401

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from lootledger.config.models import DatabaseConfig

logger = structlog.get_logger(__name__)

# Retry configuration for SQLite busy handling
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BASE_DELAY = 0.1  # 100ms base
DEFAULT_RETRY_MAX_DELAY = 2.0  # 2s max
DEFAULT_BUSY_TIMEOUT_MS = 30000


def _is_database_locked_error(error: Exception) -> bool:
    """Check if error is a SQLite database locked error."""
    error_str = str(error).lower()
    return "database is locked" in error_str or "database is busy" in error_str


class Database:
    """SQLite connection manager with WAL mode for concurrent access.

    Includes retry logic with exponential backoff for handling
    SQLite busy timeouts while acquiring the write lock.
    """

    def __init__(
        self,
        db_path: Path,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY,
        retry_max_delay: float = DEFAULT_RETRY_MAX_DELAY,
        busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS,
    ) -> None:
        self.db_path = db_path
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay
        self._retry_max_delay = retry_max_delay
        self._busy_timeout_ms = busy_timeout_ms
        self.engine = self._create_engine()

    @classmethod
    def from_config(cls, db_path: Path, config: DatabaseConfig) -> Database:
        return cls(
            db_path,
            max_retries=config.max_retries,
            retry_base_delay=config.retry_base_delay_sec,
            busy_timeout_ms=config.busy_timeout_ms,
        )

    def _create_engine(self) -> Engine:
        engine = create_engine(
            f"sqlite:///{self.db_path}",
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
        )
        busy_timeout_ms = self._busy_timeout_ms

        def _on_connect(dbapi_conn: Any, _connection_record: Any) -> None:
            _configure_pragmas(dbapi_conn, busy_timeout_ms)

        event.listen(engine, "connect", _on_connect)
        return engine

    def create_all(self) -> None:
        """Create all tables from SQLModel metadata."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        SQLModel.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """ORM session for reads."""
        with Session(self.engine, expire_on_commit=False) as session:
            yield session

    @contextmanager
    def immediate_transaction(
        self,
        max_retries: int | None = None,
    ) -> Generator[Session, None, None]:
        """
        Session with BEGIN IMMEDIATE for serializable writes.

        BEGIN IMMEDIATE acquires a RESERVED lock up front, blocking other
        writers but allowing readers. Acquiring that lock is retried with
        exponential backoff when SQLite reports the database as busy.

        The session auto-commits on successful exit and rolls back
        on exception.

        Args:
            max_retries: Override default max retries (default: 3)
        """
        retries = max_retries if max_retries is not None else self._max_retries
        session = self._begin_immediate(retries)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _begin_immediate(self, retries: int) -> Session:
        for attempt in range(retries + 1):  # +1 for initial attempt
            session = Session(self.engine, expire_on_commit=False)
            try:
                session.execute(text("BEGIN IMMEDIATE"))
                return session
            except OperationalError as e:
                session.close()
                if _is_database_locked_error(e) and attempt < retries:
                    delay = min(
                        self._retry_base_delay * (2**attempt),
                        self._retry_max_delay,
                    )
                    logger.warning(
                        "sqlite_busy_retry",
                        attempt=attempt + 1,
                        max_retries=retries,
                        delay_sec=delay,
                    )
                    time.sleep(delay)
                    continue
                raise
        raise RuntimeError("unreachable")  # pragma: no cover

    def checkpoint(self, mode: str = "PASSIVE") -> None:
        """Run WAL checkpoint.

        Args:
            mode: PASSIVE (default), FULL, RESTART, or TRUNCATE
        """
        valid_modes = {"PASSIVE", "FULL", "RESTART", "TRUNCATE"}
        if mode.upper() not in valid_modes:
            raise ValueError(f"Invalid checkpoint mode: {mode}. Must be one of {valid_modes}")

        with self.engine.connect() as conn:
            conn.execute(text(f"PRAGMA wal_checkpoint({mode.upper()})"))
            logger.debug("wal_checkpoint_completed", mode=mode)

    def dispose(self) -> None:
        self.engine.dispose()


def _configure_pragmas(dbapi_conn: Any, busy_timeout_ms: int) -> None:
    """Configure SQLite for concurrent access."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
    cursor.execute("PRAGMA synchronous=NORMAL")  # Safe with WAL
    cursor.close()
