"""Creates the initial schema (version 1) and seeds the demo user."""
from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from gestor_produtos.core.config import DB_NAME, SCHEMA_VERSION

from .errors import OpenError
from .session import Base, Database
from . import models

logger = logging.getLogger(__name__)

DEMO_USER = {
    "name": "Usuário Demo",
    "email": "demo@email.com",
    "password": "123456",
}


def stored_version(database: Database) -> int:
    """Return the recorded schema version, 0 for a brand new store."""
    if not inspect(database.engine).has_table(models.SchemaInfo.__tablename__):
        return 0
    with database.session() as session:
        info = session.get(models.SchemaInfo, DB_NAME)
        return int(info.version) if info else 0


def ensure_schema(database: Database, *, seed_demo_user: bool = True) -> int:
    """
    Upgrade hook: runs only when the store is older than SCHEMA_VERSION.
    Returns the version found before opening.
    """
    current = stored_version(database)
    if current > SCHEMA_VERSION:
        raise OpenError(
            "VersionError",
            f"Erro ao abrir o banco de dados: versao {current} maior que {SCHEMA_VERSION}",
        )
    if current == SCHEMA_VERSION:
        return current

    Base.metadata.create_all(bind=database.engine)
    with database.session() as session:
        if seed_demo_user and session.get(models.User, DEMO_USER["email"]) is None:
            session.add(models.User(**DEMO_USER))
        session.merge(models.SchemaInfo(name=DB_NAME, version=SCHEMA_VERSION))
        session.commit()
    logger.info("Banco %s criado (versao %s)", DB_NAME, SCHEMA_VERSION)
    return current


if __name__ == "__main__":
    from gestor_produtos.core.config import get_settings
    from .session import open_database

    settings = get_settings()
    try:
        db = open_database(settings.database_url, seed_demo_user=settings.seed_demo_user)
        print(f"Schema pronto: {DB_NAME} v{stored_version(db)}")
        db.dispose()
    except (OpenError, SQLAlchemyError) as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
