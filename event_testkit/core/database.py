"""Database engine and session management for event store backends."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from urllib.parse import urlparse

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def _resolve_sqlite_path(database_url: str) -> None:
    """Ensure the parent directory for a SQLite database exists."""

    parsed = urlparse(database_url)
    if parsed.scheme != "sqlite":
        return

    if parsed.path in ("", ":memory:", "/:memory:"):
        return

    # sqlite:///relative.db and sqlite:////absolute.db both carry one extra slash
    db_path = Path(parsed.path[1:])
    db_dir = db_path.expanduser().resolve().parent
    db_dir.mkdir(parents=True, exist_ok=True)


def create_event_store_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for one event store database."""

    if url.startswith("sqlite"):
        _resolve_sqlite_path(url)
        engine_kwargs: dict[str, object] = {
            "echo": echo,
            "connect_args": {"check_same_thread": False},
        }
        # Each in-memory engine is its own database; keep the one connection alive.
        if url.endswith(":memory:") or url == "sqlite://":
            engine_kwargs["poolclass"] = StaticPool
        return create_engine(url, **engine_kwargs)
    return create_engine(url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=Session,
    )


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
