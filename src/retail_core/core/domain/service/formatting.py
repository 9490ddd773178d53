"""Plain-text renderings of catalog items, carts and orders.

Everything here is pure: it reads domain objects and returns strings.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from retail_core.core.domain.model.cart import Cart, CartEntry
from retail_core.core.domain.model.item import Electronics, Item
from retail_core.core.domain.model.order import Order, OrderLine

RULE = "=" * 40
THIN_RULE = "-" * 40


def money(amount: Decimal) -> str:
    return f"${amount:.2f}"


def format_item(item: Item) -> str:
    return (
        f"Product[ID:{item.id}, Name:'{item.name}', "
        f"Price:{money(item.price)}, Stock:{item.stock}]"
    )


def describe_item(item: Item) -> str:
    lines = [
        f"Product ID: {item.id}",
        f"Name: {item.name}",
        f"Price: {money(item.price)}",
        f"Stock: {item.stock} units",
    ]
    if isinstance(item, Electronics):
        lines = (
            ["========== ELECTRONICS PRODUCT =========="]
            + lines
            + [f"Brand: {item.brand}", f"Warranty: {item.warranty_months} months", RULE]
        )
    return "\n".join(lines)


def _line(name: str, brand: str | None, quantity: int, unit: Decimal, total: Decimal) -> str:
    label = f"{name} ({brand})" if brand else name
    return f"- {label} (Qty: {quantity}) - Unit: {money(unit)} | Total: {money(total)}"


def format_cart_entry(entry: CartEntry) -> str:
    item = entry.item
    brand = item.brand if isinstance(item, Electronics) else None
    return _line(item.name, brand, entry.quantity, item.price, entry.line_total())


def format_order_line(line: OrderLine) -> str:
    return _line(line.name, line.brand, line.quantity, line.unit_price, line.subtotal())


def format_cart(cart: Cart) -> str:
    out = ["============= SHOPPING CART ============="]
    if cart.is_empty():
        out += ["Cart is empty.", RULE]
        return "\n".join(out)
    out.append("Items in your cart:")
    out += [format_cart_entry(e) for e in cart.entries()]
    out += [
        THIN_RULE,
        f"Cart Total: {money(cart.total)}",
        f"Total Items: {cart.item_count()} different products",
        RULE,
    ]
    return "\n".join(out)


def format_order(order: Order) -> str:
    out = [
        "========== ORDER CONFIRMATION ==========",
        f"Order ID: #{order.order_id.value}",
        f"Date: {order.placed_on}",
        f"Status: {order.status.value}",
        THIN_RULE,
        "Ordered Items:",
    ]
    out += [format_order_line(ln) for ln in order.lines]
    out += [THIN_RULE, f"Total Amount: {money(order.total)}", RULE]
    return "\n".join(out)


def format_order_history(orders: Sequence[Order]) -> str:
    out = ["========== ORDER HISTORY =========="]
    if not orders:
        out.append("No orders found.")
    for o in orders:
        out.append(
            f"Order #{o.order_id.value} - Total: {money(o.total)} - Status: {o.status.value}"
        )
    if orders:
        out.append(f"Total Orders: {len(orders)}")
    return "\n".join(out)


def format_inventory(items: Sequence[Item]) -> str:
    out = ["========== CURRENT INVENTORY =========="]
    if not items:
        out.append("Inventory is empty.")
        return "\n".join(out)
    for i, item in enumerate(items, start=1):
        out += [f"Product #{i}:", describe_item(item), THIN_RULE]
    out.append(f"Total Products: {len(items)}")
    return "\n".join(out)
