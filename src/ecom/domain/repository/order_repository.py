"""Abstract repository for orders and their line items."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.model.order import Order, OrderItem


class OrderRepository(ABC):

    @abstractmethod
    def create_order(self, order: Order) -> int:
        """Persist a new order header and return its generated ID."""

    @abstractmethod
    def create_order_item(self, item: OrderItem) -> None:
        """Persist one line item of an existing order."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_items(self, order_id: int) -> list[OrderItem]:
        """Return the line items of an order, in insertion order."""
