"""A tiny JSON key-value store for plugins.

Good enough for counters and flags.  Every write replaces the whole file;
there is no locking, so concurrent writers race and the last write wins.

Usage (``plugins/store/index.py``)::

    from pathlib import Path

    from burrow.store import KeyValueStore

    _store = KeyValueStore(Path(__file__).parent / ".data" / "data.json")

    get = _store.get
    set = _store.set
"""

import json
import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

logger = logging.getLogger("burrow.plugins")


class KeyValueStore:
    """JSON-file-backed mapping of string keys to JSON values."""

    __slots__ = ("_data", "_path")

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, Any] = {}
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        """(Re)read the file, creating it with an empty object if missing."""
        if self._path.is_file():
            self._data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        else:
            self._data = {}
            self.save()
        return self._data

    def save(self) -> None:
        """Write the whole store to disk, replacing the previous file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._data, fh)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug("Saved %d key(s) to %s", len(self._data), self._path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.save()

    def delete(self, key: str) -> None:
        """Remove *key*; missing keys are ignored."""
        if key in self._data:
            del self._data[key]
            self.save()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(dict(self._data))

    def __len__(self) -> int:
        return len(self._data)
