"""JSON-file-backed implementation of UnitOfWork.

Entering the block takes a lock shared by every unit of work on the same
data directory and snapshots the product and order files.  Repositories
write through to disk as usual; ``rollback()`` puts the snapshot back.

The lock is a ``StoreLock``, so a checkout run from the CLI waits for
one running inside ``ecom serve`` and the other way round.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from ecom.application.unit_of_work import UnitOfWork
from ecom.domain.exceptions import LookupFailureError
from ecom.infrastructure.persistence.json_files import write_bytes
from ecom.infrastructure.persistence.json_order_repository import JsonOrderRepository
from ecom.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from ecom.infrastructure.persistence.store_lock import lock_for

logger = structlog.get_logger(__name__)

PRODUCTS_FILE = "products.json"
ORDERS_FILE = "orders.json"
ORDER_ITEMS_FILE = "order_items.json"


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._files = [
            data_dir / PRODUCTS_FILE,
            data_dir / ORDERS_FILE,
            data_dir / ORDER_ITEMS_FILE,
        ]
        self._lock = lock_for(data_dir)
        self._snapshot: dict[Path, bytes] | None = None
        with self._lock:
            self.products = JsonProductRepository(data_dir / PRODUCTS_FILE)
            self.orders = JsonOrderRepository(
                data_dir / ORDERS_FILE, data_dir / ORDER_ITEMS_FILE
            )

    def __enter__(self) -> JsonUnitOfWork:
        self._lock.acquire()
        try:
            self._snapshot = {path: path.read_bytes() for path in self._files}
        except OSError as exc:
            self._lock.release()
            raise LookupFailureError(f"cannot snapshot store: {exc}") from exc
        return self

    def __exit__(self, *args) -> None:
        try:
            super().__exit__(*args)
        finally:
            self._lock.release()

    def commit(self) -> None:
        self._snapshot = None

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        snapshot, self._snapshot = self._snapshot, None
        for path, content in snapshot.items():
            write_bytes(path, content)
        logger.info("store.rolled_back", data_dir=str(self._data_dir))
