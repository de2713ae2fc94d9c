"""Shared JSON-file helpers for the file-backed repositories.

Every repository instance pointing at the same file shares one lock, so
a read-modify-write done under ``locked()`` is atomic within the process.
Read and write failures surface as StoreUnavailableError.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path

from billing.domain.exceptions import StoreUnavailableError

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path):
    with _locks_guard:
        return _locks.setdefault(path.resolve(), threading.RLock())


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = _lock_for(file_path)
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def locked(self):
        return self._lock

    def load(self) -> list[dict]:
        with self._lock:
            try:
                return json.loads(self._file_path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise StoreUnavailableError(
                    f"Could not read {self._file_path.name}: {exc}"
                ) from exc

    def persist(self, records: list[dict]) -> None:
        with self._lock:
            try:
                self._file_path.write_text(
                    json.dumps(records, indent=2) + "\n", encoding="utf-8"
                )
            except OSError as exc:
                raise StoreUnavailableError(
                    f"Could not write {self._file_path.name}: {exc}"
                ) from exc

    def _ensure_file(self) -> None:
        try:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StoreUnavailableError(
                f"Could not create {self._file_path}: {exc}"
            ) from exc
