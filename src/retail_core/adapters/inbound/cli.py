from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Sequence

from returns.result import Result, Success

from retail_core.core.domain.model.container import Container
from retail_core.core.domain.model.item import Electronics, Item
from retail_core.core.domain.service.formatting import (
    describe_item,
    format_cart,
    format_inventory,
    format_item,
    format_order,
    format_order_history,
    money,
)
from retail_core.core.ports.inbound.commerce import CommerceUseCase

Emit = Callable[[str], None]


def _report(emit: Emit, label: str, result: Result[Any, Any]) -> None:
    if isinstance(result, Success):
        emit(f"[ok] {label}")
    else:
        emit(f"[ng] {label}: {result.failure()}")


def run_demo(service: CommerceUseCase, emit: Emit = print) -> int:
    """Walk through the catalog, cart and checkout features in order."""
    emit("=========== RETAIL CORE DEMO ===========")

    emit("\n1. CATALOG")
    emit(format_inventory(service.catalog_items()))

    items = service.catalog_items()
    if len(items) < 3:
        emit("[ng] demo needs the sample catalog (3 items)")
        return 2
    laptop, phone, book = items[0], items[1], items[2]

    emit("\n2. RENDERING AND COMPARISON")
    for it in items:
        emit(format_item(it))
    twin = Electronics(
        id=laptop.id, name=laptop.name, price=laptop.price, stock=5, brand="ASUS"
    )
    emit(f"laptop == twin (same id): {laptop == twin}")
    emit(f"laptop == phone: {laptop == phone}")
    emit(f"laptop < phone (by price): {laptop < phone}")
    emit(f"laptop > book (by price): {laptop > book}")
    emit("by price: " + ", ".join(it.name for it in service.catalog_items(sort_by_price=True)))

    emit("\n3. CART")
    _report(emit, f"add {laptop.id} x2", service.add_to_cart(laptop.id, 2))
    _report(emit, f"add {book.id} x3", service.add_to_cart(book.id, 3))
    _report(emit, f"add {phone.id} x1", service.add_to_cart(phone.id, 1))
    emit(format_cart(service.cart))

    emit("\n4. GENERIC CONTAINER")
    categories: Container[str] = Container()
    for name in ("Electronics", "Books", "Clothing", "Sports"):
        categories.add(name)
    emit(f"categories: {categories.size()}")
    emit(f"contains 'Electronics': {categories.contains('Electronics')}")
    emit(f"contains 'Toys': {categories.contains('Toys')}")

    emit("\n5. ITEM VARIANTS")
    _report(emit, f"update stock of {laptop.id} by -1", laptop.update_stock(-1))
    _report(emit, f"update stock of {book.id} by -2", book.update_stock(-2))
    emit(describe_item(laptop))
    emit(describe_item(book))

    emit("\n6. DISCOUNTS (15%)")
    for it in items:
        emit(f"{it.name}: {money(it.price)} -> {money(it.apply_discount(0.15).value_or(it.price))}")
    emit(
        f"cart: {money(service.cart.total)} -> "
        f"{money(service.apply_cart_discount(0.15).value_or(service.cart.total))}"
    )

    emit("\n7. ERROR HANDLING")
    _report(emit, f"add {laptop.id} x50", service.add_to_cart(laptop.id, 50))
    _report(emit, "add 999 x1", service.add_to_cart(999, 1))
    _report(emit, "discount -0.1", laptop.apply_discount(-0.1))
    _report(emit, "discount 1.5", phone.apply_discount(1.5))
    _report(emit, "set price -10", book.set_price(Decimal("-10")))
    _report(emit, "set stock -5", book.set_stock(-5))
    _report(emit, "remove 999", service.remove_from_cart(999))

    emit("\n8. CHECKOUT")
    _report(emit, "cart discount 20%", service.apply_cart_discount(0.20))
    placed = service.checkout()
    if isinstance(placed, Success):
        emit(format_order(placed.unwrap()))
    else:
        emit(f"[ng] checkout: {placed.failure()}")
    emit(format_order_history(service.order_history()))
    _report(emit, "checkout empty cart", service.checkout())

    return 0


@dataclass(frozen=True)
class ScriptStep:
    op: str
    product_id: int | None = None
    quantity: int | None = None
    rate: Decimal | None = None


def run_script(service: CommerceUseCase, raw: str, emit: Emit = print) -> int:
    """
    raw: JSON list of steps.
    Example:
      [{"op":"add","product_id":101,"quantity":2},
       {"op":"discount","rate":"0.1"},
       {"op":"checkout"}]
    """
    try:
        steps = _parse_steps(json.loads(raw))
    except (ValueError, KeyError, TypeError, ArithmeticError) as e:
        emit(f"invalid_input: {e}")
        return 2

    failures = 0
    for step in steps:
        result = _run_step(service, step)
        if isinstance(result, Success):
            emit(f"[ok] {step.op}: {_describe(result.unwrap())}")
        else:
            failures += 1
            emit(f"[ng] {step.op}: {result.failure()}")

    emit(format_cart(service.cart))
    emit(format_order_history(service.order_history()))
    return 1 if failures else 0


def _run_step(service: CommerceUseCase, step: ScriptStep) -> Result[Any, Any]:
    if step.op == "add":
        return service.add_to_cart(step.product_id or 0, step.quantity or 0)
    if step.op == "remove":
        return service.remove_from_cart(step.product_id or 0)
    if step.op == "discount":
        return service.apply_cart_discount(step.rate if step.rate is not None else -1)
    if step.op == "clear":
        return Success(f"{len(service.clear_cart())} entries released")
    return service.checkout()


def _describe(value: Any) -> str:
    if isinstance(value, Decimal):
        return money(value)
    if isinstance(value, Item):
        return format_item(value)
    if hasattr(value, "order_id"):
        return f"order #{value.order_id.value} total {money(value.total)}"
    if hasattr(value, "item"):
        return f"{value.item.name} x{value.quantity}"
    return str(value)


_OPS = {"add", "remove", "discount", "clear", "checkout"}


def _parse_steps(payload: Any) -> Sequence[ScriptStep]:
    if not isinstance(payload, list):
        raise ValueError("expected a JSON list of steps")
    steps = []
    for i, x in enumerate(payload):
        op = str(x["op"])
        if op not in _OPS:
            raise ValueError(f"steps[{i}].op must be one of {sorted(_OPS)}")
        steps.append(
            ScriptStep(
                op=op,
                product_id=int(x["product_id"]) if "product_id" in x else None,
                quantity=int(x["quantity"]) if "quantity" in x else None,
                rate=Decimal(str(x["rate"])) if "rate" in x else None,
            )
        )
    return steps
