"""
Database session management.

``Database`` is the single gateway to the relational store. It owns the
bounded connection pool, hands out ORM sessions, runs raw parameterized
statements, and applies the one-shot retry for transient connectivity
errors.
"""
import functools
import logging
import time
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.orm import Session, sessionmaker

from tripmaster.core.config import Settings, settings
from tripmaster.core.exceptions import AppError, ConflictError, NotFoundError
from tripmaster.db.base import Base

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fragments of driver messages for reset / host-not-found / timeout failures
TRANSIENT_ERROR_MARKERS = (
    "connection reset",
    "connection refused",
    "server closed the connection",
    "lost connection",
    "gone away",
    "broken pipe",
    "could not translate host name",
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "timed out",
    "timeout expired",
)


def is_transient_error(exc: BaseException) -> bool:
    """Return True for connection-level failures worth a single retry."""
    if isinstance(exc, DisconnectionError):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    if isinstance(exc, OperationalError):
        message = str(exc.orig if exc.orig is not None else exc).lower()
        return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)
    return False


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """True when the insert/update points at a parent row that does not exist."""
    return "foreign key constraint" in str(exc.orig if exc.orig is not None else exc).lower()


def integrity_error_to_app_error(exc: IntegrityError, conflict_message: str = None) -> AppError:
    """
    Map an IntegrityError onto the error taxonomy.

    A missing parent (in practice the owning user, deleted while its token
    is still in use) is NotFound; unique and primary-key collisions are Conflict.
    """
    if is_foreign_key_violation(exc):
        return NotFoundError("User not found")
    return ConflictError(conflict_message)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def call_with_retry(
    func: Callable[[], T],
    delay: float,
    on_retry: Optional[Callable[[], None]] = None,
) -> T:
    """
    Call func; on a transient error wait ``delay`` seconds and call it once more.
    Non-transient errors and a second failure propagate unchanged.
    """
    try:
        return func()
    except SQLAlchemyError as exc:
        if not is_transient_error(exc):
            raise
        logger.warning("Transient database error, retrying once in %.1fs: %s", delay, exc)
        if on_retry is not None:
            on_retry()
        if delay > 0:
            time.sleep(delay)
        return func()


def retry_on_disconnect(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator for service read functions taking a Session as first argument.
    The session is rolled back before the retry so it picks up a fresh connection.
    """
    @functools.wraps(func)
    def wrapper(db: Session, *args, **kwargs):
        return call_with_retry(
            lambda: func(db, *args, **kwargs),
            delay=settings.DB_QUERY_RETRY_DELAY,
            on_retry=db.rollback,
        )
    return wrapper


class Database:
    """Process-scoped handle around the engine, its pool and the session factory."""

    def __init__(self, engine: Engine, retry_delay: float = 1.0):
        self.engine = engine
        self.retry_delay = retry_delay
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "Database":
        """Build a pooled engine from application settings."""
        url = make_url(config.database_url)
        if url.get_backend_name() == "sqlite":
            # SQLite picks its own pool class
            engine = create_engine(
                url, echo=config.DB_ECHO, connect_args={"check_same_thread": False}
            )
        else:
            engine = create_engine(
                url,
                echo=config.DB_ECHO,
                pool_size=config.DB_POOL_SIZE,
                max_overflow=0,
                pool_timeout=config.DB_POOL_TIMEOUT,
                pool_pre_ping=True,
                pool_recycle=config.DB_POOL_RECYCLE,
            )
        return cls(engine, retry_delay=config.DB_QUERY_RETRY_DELAY)

    def session(self) -> Session:
        return self.SessionLocal()

    def query(self, statement: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Execute a parameterized statement and return rows as dicts."""
        def run() -> List[Dict[str, Any]]:
            with self.engine.connect() as conn:
                result = conn.execute(text(statement), params or {})
                rows = [dict(row._mapping) for row in result] if result.returns_rows else []
                conn.commit()
                return rows

        return call_with_retry(run, delay=self.retry_delay)

    def probe(self, attempts: int = 3, delay: float = 2.0) -> bool:
        """Check connectivity, trying up to ``attempts`` times. Never raises."""
        for attempt in range(1, attempts + 1):
            try:
                logger.info("Connecting to database (attempt %d/%d)", attempt, attempts)
                rows = self.query("SELECT CURRENT_TIMESTAMP AS now")
                logger.info("Database connection established: %s", rows[0]["now"])
                return True
            except Exception as exc:
                logger.error("Database connection failed: %s", exc)
                if attempt < attempts:
                    logger.info("Retrying in %.1f seconds", delay)
                    time.sleep(delay)
        logger.error("Database connection failed after %d attempts", attempts)
        return False

    def create_all(self) -> None:
        """Create missing tables."""
        # Importing the models package registers every table on Base.metadata
        import tripmaster.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        """Close pooled connections."""
        self.engine.dispose()


def commit_or_conflict(db: Session, conflict_message: str) -> None:
    """Commit the session; integrity violations become NotFound or Conflict."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Integrity error on commit: %s", exc.orig)
        raise integrity_error_to_app_error(exc, conflict_message) from exc
    except SQLAlchemyError:
        db.rollback()
        raise


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session."""
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
