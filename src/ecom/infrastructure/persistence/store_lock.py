"""Lock on a JSON data directory, shared by threads and processes.

Every writer of one data directory (``ecom serve``, the CLI, tests)
goes through the same lock: a re-entrant thread lock for the threads
of this process, then an OS file lock on ``<data_dir>/.lock`` for
everybody else.  Both are re-entrant, so a repository write inside an
open unit of work does not deadlock.
"""

from __future__ import annotations

import threading
from pathlib import Path

from filelock import FileLock

from ecom.domain.exceptions import LookupFailureError

LOCK_FILE = ".lock"


class StoreLock:

    def __init__(self, data_dir: Path) -> None:
        self._thread_lock = threading.RLock()
        # The thread lock admits one thread at a time, so the file lock's
        # re-entrancy counter can be shared between threads.
        self._file_lock = FileLock(str(data_dir / LOCK_FILE), thread_local=False)

    def acquire(self) -> None:
        self._thread_lock.acquire()
        try:
            self._file_lock.acquire()
        except OSError as exc:
            self._thread_lock.release()
            raise LookupFailureError(f"cannot lock store: {exc}") from exc

    def release(self) -> None:
        try:
            self._file_lock.release()
        finally:
            self._thread_lock.release()

    def __enter__(self) -> StoreLock:
        self.acquire()
        return self

    def __exit__(self, *args) -> None:
        self.release()


_locks: dict[Path, StoreLock] = {}
_locks_guard = threading.Lock()


def lock_for(data_dir: Path) -> StoreLock:
    """Return the one ``StoreLock`` of this process for *data_dir*."""
    data_dir.mkdir(parents=True, exist_ok=True)
    key = data_dir.resolve()
    with _locks_guard:
        if key not in _locks:
            _locks[key] = StoreLock(key)
        return _locks[key]
