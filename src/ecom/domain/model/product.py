"""Product aggregate.

Products live independently of orders. Checkout only ever touches their
stock level; everything else about a product belongs to the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ecom.domain.exceptions import OutOfStockError, ValidationError
from ecom.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``price`` is never negative (enforced by ``Money``)
    - ``quantity`` (units in stock) is never negative
    """

    id: int | None
    name: str
    price: Money
    quantity: int
    description: str = ""
    image: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValidationError(
                f"Stock for {self.name} cannot be negative, got {self.quantity}"
            )

    def has_stock(self, quantity: int) -> bool:
        return self.quantity >= quantity

    def decrement_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises OutOfStockError rather than letting stock go negative.
        """
        if quantity <= 0:
            raise ValidationError("Stock decrement must be positive")
        if not self.has_stock(quantity):
            raise OutOfStockError(
                f"Product {self.id} is out of stock "
                f"(need {quantity}, have {self.quantity})"
            )
        self.quantity -= quantity
