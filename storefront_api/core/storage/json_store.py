"""
JSON file database.

Each resource lives in its own file under a data directory, stored as a
pretty-printed JSON array of records. Every read loads the whole file and
every mutation rewrites the whole file, so this is only suitable for small
datasets and a single server process.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

from storefront_api.core.clock import utc_timestamp
from storefront_api.core.errors import StorageError
from storefront_api.core.logging_config import get_logger

logger = get_logger(__name__)

Record = Dict[str, Any]

# Fields owned by the store; callers cannot set them through create/update
MANAGED_FIELDS = ("id", "createdAt", "updatedAt")


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class JsonFileDatabase:
    """Flat-file record store with auto-incrementing integer ids."""

    def __init__(self, data_dir: str | Path) -> None:
        """Initialize the store, creating the data directory if needed.

        Args:
            data_dir: Directory holding one ``<resource>.json`` file per resource
        """
        self.data_dir = Path(data_dir)
        if not self.data_dir.exists():
            self.data_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Database directory created: {self.data_dir}")
        # Serialises read-modify-write cycles across request threads
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator["JsonFileDatabase"]:
        """Hold the store lock across several calls, e.g. a uniqueness check followed by a write.

        The lock is re-entrant, so ``create``/``update``/``delete_record`` may be called inside.
        """
        with self._lock:
            yield self

    def _path(self, filename: str) -> Path:
        return self.data_dir / filename

    def read_file(self, filename: str) -> List[Record]:
        """Read every record from a resource file.

        Args:
            filename: Resource file name, e.g. ``users.json``

        Returns:
            The stored records; an empty list when the file is missing, empty or unreadable
        """
        path = self._path(filename)
        if not path.exists():
            return []
        try:
            raw = path.read_text(encoding="utf-8")
            if not raw.strip():
                return []
            data = json.loads(raw)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {filename}: {e}")
            return []
        if not isinstance(data, list):
            logger.error(f"Error reading {filename}: expected a JSON array, got {type(data).__name__}")
            return []
        return data

    def write_file(self, filename: str, data: List[Record]) -> bool:
        """Replace the contents of a resource file.

        The payload is written to a temporary file in the same directory and
        renamed over the target, so readers never observe a half-written file.

        Args:
            filename: Resource file name
            data: Complete list of records to persist

        Returns:
            True on success, False if the file could not be written
        """
        path = self._path(filename)
        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{filename}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error writing to {filename}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False

    def _persist(self, filename: str, data: List[Record]) -> None:
        if not self.write_file(filename, data):
            raise StorageError(filename, "could not write records")

    def get_all(self, filename: str) -> List[Record]:
        return self.read_file(filename)

    def get_by_id(self, filename: str, record_id: int | str) -> Optional[Record]:
        target = _as_int(record_id)
        return next((item for item in self.read_file(filename) if item.get("id") == target), None)

    def create(self, filename: str, fields: Record) -> Record:
        """Append a new record.

        Args:
            filename: Resource file name
            fields: Record body; ``id``, ``createdAt`` and ``updatedAt`` are assigned here

        Returns:
            The stored record

        Raises:
            StorageError: If the file could not be written
        """
        with self._lock:
            data = self.read_file(filename)
            ids = [_as_int(item.get("id")) or 0 for item in data]
            new_id = max(ids) + 1 if ids else 1
            now = utc_timestamp()
            body = {key: value for key, value in fields.items() if key not in MANAGED_FIELDS}
            record = {"id": new_id, **body, "createdAt": now, "updatedAt": now}
            data.append(record)
            self._persist(filename, data)
        logger.debug(f"Created record {new_id} in {filename}")
        return record

    def update(self, filename: str, record_id: int | str, fields: Record) -> Optional[Record]:
        """Shallow-merge ``fields`` into an existing record.

        Args:
            filename: Resource file name
            record_id: Id of the record to update
            fields: Fields to overwrite; ``id`` and ``createdAt`` are never changed

        Returns:
            The updated record, or None if no record has that id

        Raises:
            StorageError: If the file could not be written
        """
        target = _as_int(record_id)
        with self._lock:
            data = self.read_file(filename)
            index = next((i for i, item in enumerate(data) if item.get("id") == target), None)
            if index is None:
                return None
            current = data[index]
            data[index] = {
                **current,
                **fields,
                "id": current["id"],
                "createdAt": current.get("createdAt"),
                "updatedAt": utc_timestamp(),
            }
            self._persist(filename, data)
            return data[index]

    def delete_record(self, filename: str, record_id: int | str) -> bool:
        """Remove a record.

        Returns:
            True if a record was removed, False if no record has that id
        """
        target = _as_int(record_id)
        with self._lock:
            data = self.read_file(filename)
            remaining = [item for item in data if item.get("id") != target]
            if len(remaining) == len(data):
                return False
            self._persist(filename, remaining)
        logger.debug(f"Deleted record {target} from {filename}")
        return True

    def search(self, filename: str, field: str, value: Any) -> List[Record]:
        """Case-insensitive substring match on one field; missing or null fields match as ``""``."""
        needle = str(value).lower()
        results = []
        for item in self.read_file(filename):
            field_value = item.get(field)
            haystack = "" if field_value is None else str(field_value)
            if needle in haystack.lower():
                results.append(item)
        return results

    def filter(self, filename: str, predicate: Callable[[Record], bool]) -> List[Record]:
        return [item for item in self.read_file(filename) if predicate(item)]

    def count(self, filename: str) -> int:
        return len(self.read_file(filename))
