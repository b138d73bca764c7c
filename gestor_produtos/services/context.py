"""Explicit application context: store handle plus session, no module globals."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from gestor_produtos.core.config import Settings
from gestor_produtos.db.errors import OpenError
from gestor_produtos.db.session import Database, open_database
from gestor_produtos.repositories.local_storage import LocalStorage
from gestor_produtos.repositories.product_repository import ProductRepository
from gestor_produtos.services.session_service import SessionService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    session: SessionService
    database: Optional[Database] = None
    repository: Optional[ProductRepository] = None
    open_error: Optional[OpenError] = None

    @property
    def ready(self) -> bool:
        return self.repository is not None

    def close(self) -> None:
        if self.database is not None:
            self.database.dispose()


def build_context(settings: Settings) -> AppContext:
    """Open the store; a failure is kept on the context instead of raised."""
    session = SessionService(LocalStorage(settings.local_storage_path))
    try:
        database = open_database(settings.database_url, seed_demo_user=settings.seed_demo_user)
    except OpenError as exc:
        logger.error("Banco indisponivel: %s", exc.message, extra={"code": exc.code})
        return AppContext(settings=settings, session=session, open_error=exc)
    return AppContext(
        settings=settings,
        session=session,
        database=database,
        repository=ProductRepository(database),
    )
