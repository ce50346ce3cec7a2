"""Tests for the AddProduct and RegisterUser use cases."""

from decimal import Decimal

import pytest

from ecom.application.add_product import AddProductHandler
from ecom.application.register_user import RegisterUserHandler
from ecom.domain.exceptions import ValidationError
from tests.fakes import FakeProductRepository, FakeUserRepository


class TestAddProduct:

    def test_adds_with_assigned_id(self):
        repo = FakeProductRepository()
        handler = AddProductHandler(repo)

        first = handler.handle(name=" Widget ", price="15.00", quantity=10, description="A widget")
        second = handler.handle(name="Gadget", price="2", quantity=0)

        assert first.id == 1
        assert second.id == 2
        stored = repo.get_by_id(1)
        assert stored.name == "Widget"
        assert stored.price.amount == Decimal("15.00")
        assert stored.quantity == 10
        assert stored.description == "A widget"

    def test_name_required(self):
        with pytest.raises(ValidationError, match="name is required"):
            AddProductHandler(FakeProductRepository()).handle(name=" ", price="1", quantity=1)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            AddProductHandler(FakeProductRepository()).handle(name="W", price="-1", quantity=1)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            AddProductHandler(FakeProductRepository()).handle(name="W", price="1", quantity=-1)

    def test_sub_cent_price_rejected(self):
        repo = FakeProductRepository()
        with pytest.raises(ValidationError, match="whole cents"):
            AddProductHandler(repo).handle(name="W", price="0.005", quantity=1)
        assert repo.list_all() == []

    def test_trailing_zeros_accepted(self):
        product = AddProductHandler(FakeProductRepository()).handle(
            name="W", price=Decimal("4.500"), quantity=1
        )
        assert product.price.amount == Decimal("4.5")


class TestRegisterUser:

    def test_registers_user(self):
        repo = FakeUserRepository()
        user = RegisterUserHandler(repo).handle("Ada", "Lovelace", "ada@example.com")
        assert user.id == 1
        assert repo.get_by_email("ADA@example.com").full_name == "Ada Lovelace"

    def test_duplicate_email_rejected(self):
        repo = FakeUserRepository()
        handler = RegisterUserHandler(repo)
        handler.handle("Ada", "Lovelace", "ada@example.com")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("Ada", "Byron", "Ada@Example.com")

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError, match="Invalid email"):
            RegisterUserHandler(FakeUserRepository()).handle("Ada", "Lovelace", "ada")

    @pytest.mark.parametrize("first,last", [("", "Lovelace"), ("Ada", " ")])
    def test_names_required(self, first, last):
        with pytest.raises(ValidationError, match="name is required"):
            RegisterUserHandler(FakeUserRepository()).handle(first, last, "ada@example.com")
