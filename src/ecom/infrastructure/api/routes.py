"""FastAPI routes — registration, catalog, cart checkout and orders."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ecom.application.add_product import AddProductHandler
from ecom.application.checkout import CheckoutHandler
from ecom.application.dto import CartItem
from ecom.application.register_user import RegisterUserHandler
from ecom.application.show_order import ShowOrderHandler
from ecom.application.unit_of_work import UnitOfWork
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.model.product import Product
from ecom.infrastructure.api.dependencies import current_user_id, unit_of_work
from ecom.infrastructure.api.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    CreateProductRequest,
    MessageResponse,
    OrderItemSchema,
    OrderSchema,
    ProductSchema,
    RegisterUserRequest,
)

router = APIRouter(prefix="/api/v1")


def _product_schema(product: Product) -> ProductSchema:
    return ProductSchema(
        id=product.id,
        name=product.name,
        description=product.description,
        image=product.image,
        price=product.price.amount,
        quantity=product.quantity,
        created_at=product.created_at,
    )


@router.post("/register", response_model=MessageResponse, status_code=201)
def register(body: RegisterUserRequest, request: Request) -> MessageResponse:
    RegisterUserHandler(request.app.state.user_repo).handle(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
    )
    return MessageResponse(message="user created")


@router.post("/cart/checkout", response_model=CheckoutResponse)
def checkout(
    body: CheckoutRequest,
    user_id: int = Depends(current_user_id),
    uow: UnitOfWork = Depends(unit_of_work),
) -> CheckoutResponse:
    handler = CheckoutHandler(uow)
    result = handler.handle(
        user_id=user_id,
        cart_items=[CartItem(item.product_id, item.quantity) for item in body.items],
        address=body.address,
    )
    return CheckoutResponse(order_id=result.order_id, total_price=result.total_price)


@router.get("/orders/{order_id}", response_model=OrderSchema)
def show_order(
    order_id: int,
    request: Request,
    user_id: int = Depends(current_user_id),
) -> OrderSchema:
    dto = ShowOrderHandler(request.app.state.order_repo).handle(order_id, user_id=user_id)
    return OrderSchema(
        id=dto.id,
        user_id=dto.user_id,
        status=dto.status,
        address=dto.address,
        total=dto.total,
        created_at=dto.created_at,
        items=[
            OrderItemSchema(
                product_id=item.product_id,
                quantity=item.quantity,
                price=item.price,
                line_total=item.line_total,
            )
            for item in dto.items
        ],
    )


@router.get("/products", response_model=list[ProductSchema])
def list_products(request: Request) -> list[ProductSchema]:
    return [_product_schema(p) for p in request.app.state.product_repo.list_all()]


@router.post("/products", response_model=ProductSchema, status_code=201)
def create_product(
    body: CreateProductRequest,
    request: Request,
    user_id: int = Depends(current_user_id),
) -> ProductSchema:
    product = AddProductHandler(request.app.state.product_repo).handle(
        name=body.name,
        price=body.price,
        quantity=body.quantity,
        description=body.description,
        image=body.image,
    )
    return _product_schema(product)


@router.get("/products/{product_id}", response_model=ProductSchema)
def show_product(product_id: int, request: Request) -> ProductSchema:
    product = request.app.state.product_repo.get_by_id(product_id)
    if product is None:
        raise EntityNotFoundError(f"Product #{product_id} not found")
    return _product_schema(product)
