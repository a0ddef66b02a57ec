"""Mini README: Key-value persistence backends for the ledger.

The ledger depends only on the ``LedgerStore`` interface; ``JsonFileStore``
is the default durable backend and ``InMemoryStore`` suits tests.
"""

from .base import InMemoryStore, LedgerStore
from .json_file import JsonFileStore

__all__ = ["InMemoryStore", "JsonFileStore", "LedgerStore"]
