"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CartItem:
    """Input: one cart line (product id + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class CheckoutResult:
    """Output: what a successful checkout hands back to the shopper."""

    order_id: int
    total_price: Decimal


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: int
    quantity: int
    price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a placed order as displayed to the user."""

    id: int
    user_id: int
    status: str
    address: str
    items: list[OrderItemDTO]
    total: str
    created_at: str
