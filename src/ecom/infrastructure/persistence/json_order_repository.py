"""JSON-file-backed implementation of OrderRepository.

Order headers and line items live in two files, like the ``orders`` and
``order_items`` tables they stand in for.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ecom.domain.exceptions import PersistFailureError
from ecom.domain.model.order import Order, OrderItem, OrderStatus
from ecom.domain.model.value_objects import Money, Quantity
from ecom.domain.repository.order_repository import OrderRepository
from ecom.infrastructure.persistence.json_files import (
    ensure_file,
    load_records,
    next_id,
    persist_records,
)
from ecom.infrastructure.persistence.store_lock import lock_for


class JsonOrderRepository(OrderRepository):

    def __init__(self, orders_path: Path, items_path: Path) -> None:
        self._orders_path = orders_path
        self._items_path = items_path
        self._lock = lock_for(orders_path.parent)
        ensure_file(self._orders_path)
        ensure_file(self._items_path)

    # --- OrderRepository interface --------------------------------------------

    def create_order(self, order: Order) -> int:
        with self._lock:
            orders = load_records(self._orders_path)
            order.id = next_id(orders)
            orders.append(self._order_to_raw(order))
            persist_records(self._orders_path, orders)
        return order.id

    def create_order_item(self, item: OrderItem) -> None:
        if item.order_id is None:
            raise PersistFailureError("order item has no order id")
        with self._lock:
            items = load_records(self._items_path)
            items.append(self._item_to_raw(item))
            persist_records(self._items_path, items)

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in load_records(self._orders_path):
            if raw["id"] == order_id:
                return self._order_to_domain(raw)
        return None

    def list_items(self, order_id: int) -> list[OrderItem]:
        return [
            self._item_to_domain(raw)
            for raw in load_records(self._items_path)
            if raw["order_id"] == order_id
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _order_to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "total": str(order.total.amount),
            "status": order.status.value,
            "address": order.address,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _order_to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            total=Money(Decimal(raw["total"])),
            status=OrderStatus(raw["status"]),
            address=raw.get("address", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    @staticmethod
    def _item_to_raw(item: OrderItem) -> dict:
        return {
            "order_id": item.order_id,
            "product_id": item.product_id,
            "quantity": item.quantity.value,
            "price": str(item.price.amount),
        }

    @staticmethod
    def _item_to_domain(raw: dict) -> OrderItem:
        return OrderItem(
            order_id=raw["order_id"],
            product_id=raw["product_id"],
            quantity=Quantity(raw["quantity"]),
            price=Money(Decimal(raw["price"])),
        )
