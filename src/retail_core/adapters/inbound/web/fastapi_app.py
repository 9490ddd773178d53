from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from returns.result import Success

from retail_core.core.domain.model.cart import Cart, CartEntry
from retail_core.core.domain.model.errors import (
    EmptyCartError,
    InsufficientStockError,
    NotFoundError,
    NullReferenceError,
    RetailError,
    ValidationError,
)
from retail_core.core.domain.model.item import Electronics, Item
from retail_core.core.domain.model.order import Order
from retail_core.core.ports.inbound.commerce import CommerceUseCase
from retail_core.logging import get_logger

logger = get_logger(__name__)

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class ItemIn(BaseModel):
    id: int = Field(gt=0, examples=[101])
    name: str = Field(min_length=1, examples=["Gaming Laptop"])
    price: Decimal = Field(ge=0, examples=["1299.99"])
    stock: int = Field(ge=0, examples=[10])
    kind: Literal["product", "electronics"] = "product"
    warranty_months: int = Field(0, ge=0)
    brand: str = ""


class ItemOut(BaseModel):
    id: int
    name: str
    price: str
    stock: int
    kind: str
    warranty_months: int | None = None
    brand: str | None = None


class CartLineIn(BaseModel):
    product_id: int = Field(examples=[101])
    quantity: int = Field(examples=[2])


class CartLineOut(BaseModel):
    product_id: int
    name: str
    unit_price: str
    quantity: int
    line_total: str


class CartOut(BaseModel):
    total: str
    lines: list[CartLineOut]


class DiscountOut(BaseModel):
    rate: str
    total: str
    discounted_total: str


class OrderLineOut(BaseModel):
    product_id: int
    name: str
    brand: str | None
    unit_price: str
    quantity: int
    subtotal: str


class OrderOut(BaseModel):
    order_id: int
    status: str
    placed_on: str
    total: str
    lines: list[OrderLineOut]


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: list[dict[str, Any]] | None = None


def _map_error_to_http(err: RetailError) -> tuple[int, ErrorResponse]:
    body = ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, (ValidationError, NullReferenceError)):
        return 400, body

    if isinstance(err, NotFoundError):
        return 404, body

    if isinstance(err, (InsufficientStockError, EmptyCartError)):
        return 409, body

    return 500, body


def _error_response(err: RetailError) -> JSONResponse:
    status, body = _map_error_to_http(err)
    return JSONResponse(status_code=status, content=body.model_dump())


# ---- mapping helpers -------------------------------------------------------


def _item_from_dto(dto: ItemIn) -> Item:
    if dto.kind == "electronics":
        return Electronics(
            id=dto.id,
            name=dto.name,
            price=dto.price,
            stock=dto.stock,
            warranty_months=dto.warranty_months,
            brand=dto.brand,
        )
    return Item(id=dto.id, name=dto.name, price=dto.price, stock=dto.stock)


def _item_out(item: Item) -> ItemOut:
    is_electronics = isinstance(item, Electronics)
    return ItemOut(
        id=item.id,
        name=item.name,
        price=str(item.price),
        stock=item.stock,
        kind=item.kind,
        warranty_months=item.warranty_months if is_electronics else None,
        brand=item.brand if is_electronics else None,
    )


def _line_out(entry: CartEntry) -> CartLineOut:
    return CartLineOut(
        product_id=entry.item.id,
        name=entry.item.name,
        unit_price=str(entry.item.price),
        quantity=entry.quantity,
        line_total=str(entry.line_total()),
    )


def _cart_out(cart: Cart) -> CartOut:
    return CartOut(total=str(cart.total), lines=[_line_out(e) for e in cart.entries()])


def _order_out(order: Order) -> OrderOut:
    return OrderOut(
        order_id=order.order_id.value,
        status=order.status.value,
        placed_on=order.placed_on,
        total=str(order.total),
        lines=[
            OrderLineOut(
                product_id=ln.item_id,
                name=ln.name,
                brand=ln.brand,
                unit_price=str(ln.unit_price),
                quantity=ln.quantity,
                subtotal=str(ln.subtotal()),
            )
            for ln in order.lines
        ],
    )


_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


def create_app(service: CommerceUseCase) -> FastAPI:
    app = FastAPI(title="retail_core")

    # --- exception handlers -------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=[{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()],
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled error: %s", exc, exc_info=True)
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes --------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/catalog", response_model=list[ItemOut])
    def list_catalog(sort: Literal["insertion", "price"] = Query("insertion")) -> Any:
        return [
            _item_out(it) for it in service.catalog_items(sort_by_price=sort == "price")
        ]

    @app.get("/catalog/{product_id}", response_model=ItemOut, responses=_ERRORS)
    def get_item(product_id: int) -> Any:
        result = service.find_item(product_id)
        if isinstance(result, Success):
            return _item_out(result.unwrap())
        return _error_response(result.failure())

    @app.post("/catalog", response_model=ItemOut, status_code=201, responses=_ERRORS)
    def add_item(req: ItemIn) -> Any:
        try:
            item = _item_from_dto(req)
        except ValidationError as exc:
            return _error_response(exc)
        result = service.add_catalog_item(item)
        if isinstance(result, Success):
            return _item_out(result.unwrap())
        return _error_response(result.failure())

    @app.get("/cart", response_model=CartOut)
    def get_cart() -> Any:
        return _cart_out(service.cart)

    @app.post("/cart/items", response_model=CartOut, responses=_ERRORS)
    def add_to_cart(req: CartLineIn) -> Any:
        result = service.add_to_cart(req.product_id, req.quantity)
        if isinstance(result, Success):
            return _cart_out(service.cart)
        return _error_response(result.failure())

    @app.delete("/cart/items/{product_id}", response_model=CartOut, responses=_ERRORS)
    def remove_from_cart(product_id: int) -> Any:
        result = service.remove_from_cart(product_id)
        if isinstance(result, Success):
            return _cart_out(service.cart)
        return _error_response(result.failure())

    @app.delete("/cart", response_model=CartOut)
    def clear_cart() -> Any:
        service.clear_cart()
        return _cart_out(service.cart)

    @app.get("/cart/discount", response_model=DiscountOut, responses=_ERRORS)
    def cart_discount(rate: Decimal = Query(...)) -> Any:
        total = service.cart.total
        result = service.apply_cart_discount(rate)
        if isinstance(result, Success):
            return DiscountOut(
                rate=str(rate), total=str(total), discounted_total=str(result.unwrap())
            )
        return _error_response(result.failure())

    @app.post("/checkout", response_model=OrderOut, status_code=201, responses=_ERRORS)
    def checkout() -> Any:
        result = service.checkout()
        if isinstance(result, Success):
            return _order_out(result.unwrap())
        return _error_response(result.failure())

    @app.get("/orders", response_model=list[OrderOut])
    def list_orders() -> Any:
        return [_order_out(o) for o in service.order_history()]

    @app.get("/orders/{order_id}", response_model=OrderOut, responses=_ERRORS)
    def get_order(order_id: int) -> Any:
        result = service.find_order(order_id)
        if isinstance(result, Success):
            return _order_out(result.unwrap())
        return _error_response(result.failure())

    return app
