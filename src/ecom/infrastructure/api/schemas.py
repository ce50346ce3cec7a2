"""Pydantic request/response schemas for the HTTP API.

These are external contracts — separate from the application DTOs.
Field aliases carry the wire names (``productID``, ``orderID``, ...).
Quantities are only type-checked here; whether a quantity is acceptable
is the checkout's decision.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StrictInt

from ecom.domain.model.value_objects import CENTS


def _to_json_number(amount: Decimal) -> float:
    # Whole cents, so the float repr is the exact decimal for any
    # amount below 10**13.
    return float(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


# Decimal on our side, a JSON number on the wire.
WireMoney = Annotated[
    Decimal, PlainSerializer(_to_json_number, return_type=float, when_used="json")
]


class CartItemSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: StrictInt = Field(alias="productID")
    quantity: StrictInt


class CheckoutRequest(BaseModel):
    items: list[CartItemSchema]
    address: str = ""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"productID": 1, "quantity": 2}],
                }
            ]
        }
    }


class CheckoutResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: int = Field(alias="orderID")
    total_price: WireMoney = Field(alias="totalPrice")


class ProductSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    description: str
    image: str
    price: WireMoney
    quantity: int
    created_at: datetime = Field(alias="createdAt")


class OrderItemSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(alias="productID")
    quantity: int
    price: str
    line_total: str = Field(alias="lineTotal")


class OrderSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    user_id: int = Field(alias="userID")
    status: str
    address: str
    total: str
    created_at: str = Field(alias="createdAt")
    items: list[OrderItemSchema]


class CreateProductRequest(BaseModel):
    name: str
    description: str = ""
    image: str = ""
    price: Decimal
    quantity: StrictInt


class RegisterUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str


class MessageResponse(BaseModel):
    message: str
