"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal

from ecom.domain.exceptions import ValidationError
from ecom.domain.model.product import Product
from ecom.domain.model.value_objects import Money
from ecom.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str | Decimal,
        quantity: int,
        description: str = "",
        image: str = "",
    ) -> Product:
        """Add a new product to the catalog with an initial stock level."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        unit_price = Money.of(price)
        if not unit_price.is_whole_cents():
            raise ValidationError(f"Price must be in whole cents, got {price}")

        product = Product(
            id=None,
            name=name.strip(),
            description=description.strip(),
            image=image.strip(),
            price=unit_price,
            quantity=quantity,
        )
        return self._product_repo.add(product)
