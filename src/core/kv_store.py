"""Key-value stores holding the persisted tracker snapshot.

Values are JSON text, one document per key, so any store with plain
get/set semantics can back the tracker.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol

from src.core.errors import StorageError


logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal get/set contract the persistence service relies on."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryKeyValueStore:
    """Thread-safe in-memory store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Initialize the store, optionally pre-seeded with raw values."""
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()
        self._total_operations = 0

    def get(self, key: str) -> str | None:
        """Get the raw value stored under key, or None."""
        with self._lock:
            self._total_operations += 1
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a raw value under key."""
        with self._lock:
            self._data[key] = value
            self._total_operations += 1
            logger.debug("Stored key: %s", key)

    def keys(self) -> list[str]:
        """Return the stored keys."""
        with self._lock:
            return list(self._data)

    def get_health_status(self) -> dict[str, object]:
        """Get store health status."""
        return {
            "backend": "memory",
            "total_operations": self._total_operations,
            "entries": len(self._data),
        }


class JsonFileKeyValueStore:
    """Store backed by a single JSON document on disk.

    The whole document is rewritten on every set through a temporary file and
    an atomic replace, so a crash mid-write leaves the previous snapshot intact.
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the store for the given file path (created on first write)."""
        self._path = Path(path)
        self._lock = threading.Lock()
        self._cache: dict[str, str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict[str, str]:
        """Read the backing document, treating a missing file as empty.

        Raises:
            StorageError: If the file exists but cannot be read or decoded
        """
        if self._cache is not None:
            return self._cache
        if not self._path.exists():
            self._cache = {}
            return self._cache
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:  # ValueError covers JSON and UTF-8 decode errors
            raise StorageError(f"Failed to read {self._path}: {e}") from e
        if not isinstance(raw, dict):
            raise StorageError(f"Expected a JSON object in {self._path}, got {type(raw).__name__}")
        self._cache = {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in raw.items()}
        return self._cache

    def get(self, key: str) -> str | None:
        """Get the raw value stored under key, or None.

        Raises:
            StorageError: If the backing file is unreadable
        """
        with self._lock:
            return self._read_document().get(key)

    def set(self, key: str, value: str) -> None:
        """Store a raw value under key and flush the document to disk.

        Raises:
            StorageError: If the document cannot be written
        """
        with self._lock:
            try:
                document = dict(self._read_document())
            except StorageError:
                logger.warning("Overwriting unreadable store file %s", self._path)
                document = {}
            document[key] = value
            self._write_document(document, key=key)
            self._cache = document

    def _write_document(self, document: dict[str, str], *, key: str) -> None:
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_name, self._path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Failed to write {self._path}: {e}", key=key) from e
        logger.debug("Flushed key %s to %s", key, self._path)
