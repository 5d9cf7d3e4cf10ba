"""
Module: consignment_kernel.db.engine
Responsibility: Owns the process-wide SQLAlchemy engine and session factory
    for the consignor ledger store, plus the commit/rollback scope used by
    write paths.
Architecture position: Kernel > DB.  Imports db/base.py; create_tables also
    imports models/ so every table is registered on the metadata.

Invariants enforced:
    - One engine per process; init_engine_from_url replaces any previous one.
    - PostgreSQL connections use READ COMMITTED through a pre-pinged
      QueuePool.  Each metrics request opens its own session, so it computes
      from its own snapshot.
    - SQLite (tests) shares one connection through StaticPool, so an
      in-memory database is visible to every session.
    - Sessions do not expire attributes on commit; records handed to engines
      stay readable after the transaction ends.

Failure modes:
    - RuntimeError when a session or the engine is requested before
      init_engine_from_url().
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from consignment_kernel.logging_config import configure_logging, get_logger

logger = get_logger("db.engine")

_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None

_NOT_INITIALIZED = "Database engine not initialized; call init_engine_from_url() first."


def _dialect_of(database_url: str) -> str:
    """``postgresql+psycopg2://...`` -> ``postgresql``."""
    scheme = database_url.split(":", 1)[0]
    return scheme.split("+", 1)[0]


def init_engine_from_url(
    database_url: str,
    echo: bool = False,
    pool_size: int = 10,
    max_overflow: int = 5,
    pool_timeout: int = 30,
    pool_recycle: int = 1800,
) -> Engine:
    """
    Create the engine and session factory for ``database_url``.

    Args:
        database_url: ``postgresql://...`` in production, ``sqlite://`` in tests.
        echo: Log every SQL statement.
        pool_size, max_overflow, pool_timeout, pool_recycle: QueuePool
            settings; ignored for SQLite.
    """
    global _engine, _SessionFactory

    dialect = _dialect_of(database_url)
    if dialect == "sqlite":
        engine = create_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(
            database_url,
            echo=echo,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
            pool_pre_ping=True,
            isolation_level="READ COMMITTED",
        )

    if _engine is not None:
        _engine.dispose()
    _engine = engine
    _SessionFactory = sessionmaker(bind=engine, expire_on_commit=False)

    configure_logging()
    logger.info("engine_initialized", extra={"dialect": dialect, "echo": echo})
    return engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError(_NOT_INITIALIZED)
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    if _SessionFactory is None:
        raise RuntimeError(_NOT_INITIALIZED)
    return _SessionFactory


def get_session() -> Session:
    """A new Session; the caller closes it."""
    return get_session_factory()()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Session that commits on success and rolls back on error.

    Usage:
        with session_scope() as session:
            session.add(ConsignorModel(...))
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("session_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables() -> None:
    """Create every consignment table that does not exist yet."""
    from consignment_kernel.db.base import Base
    import consignment_kernel.models  # noqa: F401

    Base.metadata.create_all(get_engine())
    logger.info("tables_created", extra={"tables": sorted(Base.metadata.tables)})


def drop_tables() -> None:
    """Drop every consignment table.  Tests only."""
    from consignment_kernel.db.base import Base

    Base.metadata.drop_all(get_engine())


def reset_engine() -> None:
    """Dispose the engine and forget the session factory."""
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None
