"""A single JSON document on disk, replaced atomically on every write.

Carts and orders share one document so a checkout (new order + emptied
cart) lands in a single ``os.replace``: readers see either the old file
or the new one, never a half-written mix.

Ids come from per-collection sequences kept in the same document under
``"sequences"``.  A reserved id is never handed out twice, even when the
transaction that reserved it rolls back.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rxcart.domain.exceptions import StorageError

EMPTY_DOCUMENT: dict[str, list] = {"carts": [], "orders": []}

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _locks_guard:
        return _locks.setdefault(path, threading.Lock())


class JsonDocumentStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Serialize commits to this file within the process."""
        with _lock_for(self._file_path):
            yield

    def load(self) -> dict[str, list]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot read store {self._file_path}: {exc}") from exc
        for key in EMPTY_DOCUMENT:
            raw.setdefault(key, [])
        return raw

    def reserve_id(self, collection: str) -> int:
        """Hand out the next id for *collection* ("carts" or "orders").

        Reads the file afresh under the lock, so units of work that began
        from the same snapshot still get distinct ids.
        """
        with self.lock():
            document = self.load()
            sequences = document.setdefault("sequences", {})
            highest = max((raw["id"] for raw in document[collection]), default=0)
            next_id = max(sequences.get(collection, 0), highest) + 1
            sequences[collection] = next_id
            self.replace(document)
        return next_id

    def replace(self, document: dict[str, list]) -> None:
        payload = json.dumps(document, indent=2) + "\n"
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, self._file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Cannot write store {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text(json.dumps(EMPTY_DOCUMENT), encoding="utf-8")
            except OSError as exc:
                raise StorageError(f"Cannot create store {self._file_path}: {exc}") from exc
