"""Engine/session helpers for the embedded SQLite store."""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from .errors import OpenError

Base = declarative_base()
logger = logging.getLogger(__name__)


class Database:
    """Handle to an opened store: the engine plus its session factory."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._sessionmaker = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    @contextmanager
    def session(self) -> Session:
        session: Session = self._sessionmaker()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()


def _create_engine(url: str) -> Engine:
    parsed = make_url(url)
    connect_args = {}
    if parsed.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        path = parsed.database or ""
        if path and path != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    return create_engine(url, future=True, connect_args=connect_args)


def open_database(url: str, *, seed_demo_user: bool = True) -> Database:
    """Open (or create on first run) the store and make sure the schema exists."""
    from .schema import ensure_schema

    if not (url or "").strip():
        raise OpenError("InvalidStateError", "Erro ao abrir o banco de dados: URL vazia")
    try:
        engine = _create_engine(url)
    except (ArgumentError, OSError) as exc:
        logger.error("Falha ao criar engine para %s", url, extra={"code": type(exc).__name__})
        raise OpenError(type(exc).__name__, f"Erro ao abrir o banco de dados: {type(exc).__name__}") from exc
    database = Database(engine)
    try:
        ensure_schema(database, seed_demo_user=seed_demo_user)
    except OpenError:
        database.dispose()
        raise
    except SQLAlchemyError as exc:
        database.dispose()
        code = type(exc).__name__
        logger.error("Falha ao abrir o banco de dados", extra={"code": code})
        raise OpenError(code, f"Erro ao abrir o banco de dados: {code}") from exc
    return database
