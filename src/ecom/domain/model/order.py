"""Order and OrderItem — the ledger side of a checkout.

An Order is written once per successful checkout and is not changed by
this system afterwards. Its line items are separate records that point
back at it by ``order_id``, mirroring the ``orders`` / ``order_items``
tables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ecom.domain.exceptions import ValidationError
from ecom.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class OrderItem:
    """One cart line of a placed order.

    ``price`` is the catalog price at checkout time (the price snapshot);
    later catalog price changes never reach it.
    """

    order_id: int | None
    product_id: int
    quantity: Quantity
    price: Money

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value

    def for_order(self, order_id: int) -> OrderItem:
        """Return a copy of this item attached to *order_id*."""
        return OrderItem(
            order_id=order_id,
            product_id=self.product_id,
            quantity=self.quantity,
            price=self.price,
        )


@dataclass
class Order:
    """Order header.

    Use ``Order.place()`` for new orders.  The ``__init__`` stays simple so
    the repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: int
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    address: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def place(user_id: int, items: list[OrderItem], address: str = "") -> Order:
        """Create a pending order whose total is the sum of *items*."""
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Order(
            id=None,
            user_id=user_id,
            total=total,
            status=OrderStatus.PENDING,
            address=address.strip(),
        )
