"""Application service: Show Order use case (query)."""

from __future__ import annotations

from ecom.application.dto import OrderDTO, OrderItemDTO
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.model.order import Order, OrderItem
from ecom.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, user_id: int | None = None) -> OrderDTO:
        """Return an order with its items.

        When *user_id* is given, orders placed by other users are
        reported as not found.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None or (user_id is not None and order.user_id != user_id):
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return self._to_dto(order, self._order_repo.list_items(order_id))

    @staticmethod
    def _to_dto(order: Order, items: list[OrderItem]) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            user_id=order.user_id,
            status=order.status.value,
            address=order.address,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    price=str(item.price),
                    line_total=str(item.line_total),
                )
                for item in items
            ],
            total=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
