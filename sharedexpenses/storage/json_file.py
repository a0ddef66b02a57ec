"""Mini README: File-backed ledger store writing one JSON file per key.

Structure:
    * JsonFileStore - maps store keys to ``<directory>/<percent-encoded key>.json``.

Keys are percent-encoded so distinct keys never share a file. Writes go to a
temporary sibling file first and are moved into place with ``os.replace`` so
a crash mid-write never leaves a truncated ledger behind; a failed write
removes its temporary file. Filesystem and decoding failures surface as
``PersistenceError`` for the ledger to log.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

from ..errors import PersistenceError
from ..logging_utils import get_logger
from .base import LedgerStore

LOGGER = get_logger(__name__)


class JsonFileStore(LedgerStore):
    """Persist ledger payloads as UTF-8 JSON files inside a directory."""

    store_name = "json-file"

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory).expanduser()
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise PersistenceError(f"Cannot create store directory {self.directory}: {error}") from error
        LOGGER.debug("JSON ledger store rooted at %s", self.directory)

    def path_for(self, key: str) -> Path:
        """Return the file holding ``key`` (``a:b`` -> ``a%3Ab.json``)."""

        return self.directory / f"{quote(key, safe='')}.json"

    def load(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            LOGGER.debug("No stored value for %s at %s", key, path)
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise PersistenceError(f"Failed to read {path}: {error}") from error

    def save(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        temp_path = path.with_name(path.name + ".tmp")
        try:
            temp_path.write_text(payload, encoding="utf-8")
            os.replace(temp_path, path)
        except OSError as error:
            temp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write {path}: {error}") from error
        LOGGER.debug("Saved %s bytes for %s", len(payload), key)

    def metadata(self) -> Dict[str, str]:
        return {"store": self.store_name, "directory": str(self.directory)}
