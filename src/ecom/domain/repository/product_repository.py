"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.

Implementations raise ``LookupFailureError`` when a read fails and
``PersistFailureError`` when a write fails.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_ids(self, product_ids: set[int]) -> list[Product]:
        """Return the products whose IDs are in *product_ids*.

        Unknown IDs are left out of the result; they are not an error.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Persist a new product and assign its ID."""

    @abstractmethod
    def update(self, product: Product) -> None:
        """Overwrite the stored record for ``product.id`` with *product*."""
