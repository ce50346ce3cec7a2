"""Application service: Checkout use case.

Turns a shopper's cart into a pending order and takes the ordered units
out of stock.  This is the only place that coordinates the catalog and
the order ledger.

The flow is validate-then-mutate: the cart is checked against the
catalog in full before the first write, and every write happens inside
one unit of work so a failure half-way through leaves no trace.
"""

from __future__ import annotations

import structlog

from ecom.application.dto import CartItem, CheckoutResult
from ecom.application.unit_of_work import UnitOfWork
from ecom.domain.exceptions import (
    DomainException,
    InvalidInputError,
    LookupFailureError,
    OutOfStockError,
    ProductNotFoundError,
    UpstreamFailureError,
)
from ecom.domain.model.order import Order, OrderItem
from ecom.domain.model.product import Product
from ecom.domain.model.value_objects import Quantity

logger = structlog.get_logger(__name__)


class CheckoutHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: int,
        cart_items: list[CartItem],
        address: str = "",
    ) -> CheckoutResult:
        """Place an order for *cart_items* on behalf of *user_id*.

        Steps:
        1. Validate the cart shape (no store access).
        2. Resolve all referenced products in one lookup.
        3. Check every line against stock before any write.
        4. Price each line at the current catalog price.
        5. Decrement stock, create the order, create its line items.
        6. Commit, then return the order ID and total.
        """
        try:
            requested = self._validate_cart(cart_items)

            with self._uow:
                products = self._resolve_products(set(requested))
                self._check_stock(cart_items, requested, products)

                items = [
                    OrderItem(
                        order_id=None,
                        product_id=line.product_id,
                        quantity=Quantity(line.quantity),
                        price=products[line.product_id].price,  # <-- price snapshot
                    )
                    for line in cart_items
                ]
                order = Order.place(user_id=user_id, items=items, address=address)

                for product_id, quantity in requested.items():
                    product = products[product_id]
                    product.decrement_stock(quantity)
                    self._uow.products.update(product)

                order_id = self._uow.orders.create_order(order)
                for item in items:
                    self._uow.orders.create_order_item(item.for_order(order_id))

                self._uow.commit()
        except DomainException as exc:
            logger.info("checkout.rejected", user_id=user_id, reason=str(exc))
            raise

        logger.info(
            "checkout.completed",
            user_id=user_id,
            order_id=order_id,
            lines=len(items),
            total=str(order.total.amount),
        )
        return CheckoutResult(order_id=order_id, total_price=order.total.amount)

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _validate_cart(cart_items: list[CartItem]) -> dict[int, int]:
        """Return the total quantity requested per product ID.

        Duplicate lines for one product stay separate lines on the order,
        but their quantities are summed here so the stock check and the
        decrement see the real demand on that product.
        """
        if not cart_items:
            raise InvalidInputError("no items in cart")

        requested: dict[int, int] = {}
        for line in cart_items:
            if isinstance(line.product_id, bool) or not isinstance(line.product_id, int):
                raise InvalidInputError(f"invalid product id {line.product_id!r}")
            if (
                isinstance(line.quantity, bool)
                or not isinstance(line.quantity, int)
                or line.quantity <= 0
            ):
                raise InvalidInputError(
                    f"invalid quantity for product {line.product_id}"
                )
            requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity
        return requested

    def _resolve_products(self, product_ids: set[int]) -> dict[int, Product]:
        try:
            products = self._uow.products.get_by_ids(product_ids)
        except LookupFailureError as exc:
            raise UpstreamFailureError("could not load products for checkout") from exc
        return {product.id: product for product in products}  # type: ignore[misc]

    @staticmethod
    def _check_stock(
        cart_items: list[CartItem],
        requested: dict[int, int],
        products: dict[int, Product],
    ) -> None:
        for line in cart_items:
            product = products.get(line.product_id)
            if product is None:
                raise ProductNotFoundError(f"product {line.product_id} not found")
            if not product.has_stock(requested[line.product_id]):
                raise OutOfStockError(f"product {line.product_id} is out of stock")
