"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ecom.domain.exceptions import PersistFailureError
from ecom.domain.model.product import Product
from ecom.domain.model.value_objects import Money
from ecom.domain.repository.product_repository import ProductRepository
from ecom.infrastructure.persistence.json_files import (
    ensure_file,
    load_records,
    next_id,
    persist_records,
)
from ecom.infrastructure.persistence.store_lock import lock_for


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = lock_for(file_path.parent)
        ensure_file(self._file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        for raw in load_records(self._file_path):
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_ids(self, product_ids: set[int]) -> list[Product]:
        return [
            self._to_domain(raw)
            for raw in load_records(self._file_path)
            if raw["id"] in product_ids
        ]

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in load_records(self._file_path)]

    def add(self, product: Product) -> Product:
        with self._lock:
            records = load_records(self._file_path)
            product.id = next_id(records)
            records.append(self._to_raw(product))
            persist_records(self._file_path, records)
        return product

    def update(self, product: Product) -> None:
        with self._lock:
            records = load_records(self._file_path)
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self._to_raw(product)
                    break
            else:
                raise PersistFailureError(f"product {product.id} does not exist")
            persist_records(self._file_path, records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "image": product.image,
            "price": str(product.price.amount),
            "quantity": product.quantity,
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            image=raw.get("image", ""),
            price=Money(Decimal(raw["price"])),
            quantity=raw["quantity"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
