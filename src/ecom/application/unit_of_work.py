"""Unit of Work port — the transaction scope of a checkout.

Usage::

    with uow:
        products = uow.products.get_by_ids(ids)
        ...
        uow.commit()

Leaving the block without ``commit()`` (normally because something
raised) rolls back every write made through ``uow.products`` and
``uow.orders``.  While the block is open no other unit of work on the
same store can run, so reads taken inside it cannot go stale before
the commit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.repository.order_repository import OrderRepository
from ecom.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, *args) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write since entering the block permanent."""

    @abstractmethod
    def rollback(self) -> None:
        """Undo uncommitted writes.  A no-op after ``commit()``."""
