"""
Persistence port for the two top-level collections.

Repositories only see `load(key)` / `save(key, items)`; where the JSON arrays
live (SQL row, memory) is decided by whoever builds the repository.
"""

import copy
from datetime import datetime
from typing import Callable, Protocol

from sqlmodel import Session

from foodcost.logging import get_logger
from foodcost.storage.models import StoredCollection

logger = get_logger(__name__)


class CollectionStore(Protocol):
    def load(self, key: str) -> list[dict]:
        ...

    def save(self, key: str, items: list[dict]) -> None:
        ...


class MemoryCollectionStore:
    def __init__(self, initial: dict[str, list[dict]] | None = None) -> None:
        self._data: dict[str, list[dict]] = copy.deepcopy(initial or {})

    def load(self, key: str) -> list[dict]:
        return copy.deepcopy(self._data.get(key, []))

    def save(self, key: str, items: list[dict]) -> None:
        self._data[key] = copy.deepcopy(items)


class SqlCollectionStore:
    """Keeps each collection as a JSON array in a single `StoredCollection` row."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def load(self, key: str) -> list[dict]:
        with self._session_factory() as session:
            row = session.get(StoredCollection, key)
            items = list(row.items) if row else []
        logger.debug("store.load key=%s count=%s", key, len(items))
        return items

    def save(self, key: str, items: list[dict]) -> None:
        with self._session_factory() as session:
            row = session.get(StoredCollection, key)
            if row is None:
                row = StoredCollection(key=key, items=items)
            else:
                row.items = items
                row.updated_at = datetime.utcnow()
            session.add(row)
            session.commit()
        logger.info("store.saved key=%s count=%s", key, len(items))
