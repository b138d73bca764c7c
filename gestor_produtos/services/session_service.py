"""Session helpers: in-memory current user mirrored into the durable slot."""
from __future__ import annotations

import json
import logging
from typing import Optional

from gestor_produtos.domain.records import UserRecord
from gestor_produtos.repositories.local_storage import LocalStorage

SESSION_KEY = "currentUser"

logger = logging.getLogger(__name__)


class SessionService:
    def __init__(self, storage: LocalStorage) -> None:
        self.storage = storage
        self.current: Optional[UserRecord] = None

    def restore(self) -> Optional[UserRecord]:
        """Load the persisted user, if any, into memory."""
        raw = self.storage.get_item(SESSION_KEY)
        if not raw:
            self.current = None
            return None
        try:
            self.current = UserRecord.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError, AttributeError):
            logger.warning("Sessao persistida invalida; descartando")
            self.storage.remove_item(SESSION_KEY)
            self.current = None
        return self.current

    def start(self, user: UserRecord) -> None:
        self.current = user
        self.storage.set_item(SESSION_KEY, json.dumps(user.to_dict(), ensure_ascii=False))

    def clear(self) -> None:
        self.current = None
        self.storage.remove_item(SESSION_KEY)
