"""Mini README: Abstract key-value store the ledger persists through.

Structure:
    * LedgerStore - abstract interface with ``load``/``save`` of raw JSON text.
    * InMemoryStore - dict-backed implementation for tests and embedding callers.

The ledger only ever reads its two keys once at startup and rewrites them
after each mutation, so stores stay deliberately small: no transactions, no
listing, no deletion.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class LedgerStore(ABC):
    """Base interface for durable ledger storage."""

    store_name: str = "generic"

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the serialised JSON held under ``key`` or ``None`` when absent.

        Raises ``PersistenceError`` when the backing medium cannot be read.
        """

    @abstractmethod
    def save(self, key: str, payload: str) -> None:
        """Replace the value under ``key``; raises ``PersistenceError`` on failure."""

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for the ledger start-up log."""

        return {"store": self.store_name}


class InMemoryStore(LedgerStore):
    """Keep ledger payloads in a process-local dictionary."""

    store_name = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})
        LOGGER.debug("In-memory store initialised with keys: %s", sorted(self._values))

    def load(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def save(self, key: str, payload: str) -> None:
        self._values[key] = payload
