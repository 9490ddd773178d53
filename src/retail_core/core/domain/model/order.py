from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable, Tuple

from returns.result import Failure, Result, Success

from retail_core.core.domain.model.cart import Cart, CartEntry
from retail_core.core.domain.model.errors import EmptyCartError, RetailError
from retail_core.core.domain.model.item import Electronics, to_amount


@dataclass(frozen=True)
class OrderId:
    value: int


class OrderIdSequence:
    """Hands out order ids 1, 2, 3, ... Each service owns one."""

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError(f"order ids start at 1 or above, got {start}")
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> OrderId:
        with self._lock:
            value = self._next
            self._next += 1
        return OrderId(value)

    def peek(self) -> int:
        with self._lock:
            return self._next


class OrderStatus(str, Enum):
    CONFIRMED = "Confirmed"


@dataclass(frozen=True)
class OrderLine:
    item_id: int
    name: str
    unit_price: Decimal
    quantity: int
    brand: str | None = None

    def subtotal(self) -> Decimal:
        return to_amount(self.unit_price * self.quantity)

    @staticmethod
    def snapshot(entry: CartEntry) -> "OrderLine":
        item = entry.item
        return OrderLine(
            item_id=item.id,
            name=item.name,
            unit_price=item.price,
            quantity=entry.quantity,
            brand=item.brand if isinstance(item, Electronics) else None,
        )


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    lines: Tuple[OrderLine, ...]
    total: Decimal
    placed_on: str
    status: OrderStatus = OrderStatus.CONFIRMED

    @staticmethod
    def create(
        cart: Cart, ids: OrderIdSequence, placed_on: str | None = None
    ) -> Result["Order", RetailError]:
        """Freeze the cart's current lines into a confirmed order.

        The cart is left as it is; emptying it belongs to checkout.
        """
        lines = tuple(OrderLine.snapshot(e) for e in cart.entries())
        if not lines:
            return Failure(EmptyCartError(message="cannot create an order from an empty cart"))
        return Success(
            Order(
                order_id=ids.next(),
                lines=lines,
                total=cart.total,
                placed_on=placed_on or today_label(),
            )
        )

    def item_count(self) -> int:
        return len(self.lines)

    def lines_total(self) -> Decimal:
        return fold_amounts(ln.subtotal() for ln in self.lines)


def fold_amounts(values: Iterable[Decimal]) -> Decimal:
    total = to_amount(0)
    for v in values:
        total = total + v
    return total


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def today_label() -> str:
    return now_utc().date().isoformat()
