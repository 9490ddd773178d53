from __future__ import annotations

import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from returns.result import Failure, Result, Success

from retail_core.core.domain.model.container import Container
from retail_core.core.domain.model.errors import (
    InsufficientStockError,
    NotFoundError,
    NullReferenceError,
    RetailError,
    ValidationError,
)
from retail_core.core.domain.model.item import Amount, Item, to_amount, validate_rate
from retail_core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CartEntry:
    item: Item
    quantity: int

    def line_total(self) -> Decimal:
        return to_amount(self.item.price * self.quantity)


def sum_line_totals(entries: Iterable[CartEntry]) -> Decimal:
    total = to_amount(0)
    for e in entries:
        total = total + e.line_total()
    return total


class Cart:
    """Shopping cart that reserves catalog stock as entries are added.

    Stock leaves the catalog item on ``add_product`` and goes back on
    ``remove_product``/``clear``. Checkout holds ``lock`` from the order
    snapshot until the cart is cleared.
    """

    def __init__(self) -> None:
        self._entries: Container[CartEntry] = Container()
        self._total: Decimal = to_amount(0)
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def total(self) -> Decimal:
        return self._total

    def entries(self) -> Tuple[CartEntry, ...]:
        return self._entries.all()

    def item_count(self) -> int:
        return self._entries.size()

    def is_empty(self) -> bool:
        return self._entries.is_empty()

    def quantity_of(self, item_id: int) -> int:
        entry = self._find_entry(item_id)
        return entry.quantity if entry is not None else 0

    def add_product(
        self, item: Optional[Item], quantity: int
    ) -> Result[CartEntry, RetailError]:
        if item is None:
            logger.warning("rejected add: no item given")
            return Failure(NullReferenceError(message="cannot add a missing item to the cart"))
        if quantity <= 0:
            logger.warning("rejected add of item %d: quantity %d", item.id, quantity)
            return Failure(
                ValidationError(message=f"quantity must be > 0, got {quantity}")
            )

        with self._lock, item.lock:
            if item.stock < quantity:
                logger.warning(
                    "insufficient stock for %s: available=%d requested=%d",
                    item.name,
                    item.stock,
                    quantity,
                )
                return Failure(
                    InsufficientStockError(
                        message=f"insufficient stock for {item.name}",
                        item_id=item.id,
                        available=item.stock,
                        requested=quantity,
                    )
                )

            reserved = item.update_stock(-quantity)
            if isinstance(reserved, Failure):
                return reserved

            entry = self._find_entry(item.id)
            if entry is None:
                entry = CartEntry(item=item, quantity=quantity)
                self._entries.add(entry)
            else:
                entry.quantity += quantity
            self._recalculate()

        logger.info(
            "added %d x %s to cart (total %s)", quantity, item.name, self._total
        )
        return Success(entry)

    def remove_product(self, item: Optional[Item]) -> Result[CartEntry, RetailError]:
        if item is None:
            logger.warning("rejected remove: no item given")
            return Failure(
                NullReferenceError(message="cannot remove a missing item from the cart")
            )

        with self._lock, item.lock:
            entry = self._find_entry(item.id)
            if entry is None:
                logger.warning("item %d is not in the cart", item.id)
                return Failure(
                    NotFoundError(message=f"{item.name} not found in cart", entity_id=item.id)
                )

            restored = item.update_stock(entry.quantity)
            if isinstance(restored, Failure):
                return restored
            self._entries.remove(entry)
            self._recalculate()

        logger.info("removed %s from cart (total %s)", item.name, self._total)
        return Success(entry)

    def apply_discount(self, rate: Amount) -> Result[Decimal, RetailError]:
        with self._lock:
            total = self._total
        return validate_rate(rate).map(lambda r: to_amount(total * (1 - r)))

    def clear(self) -> Tuple[CartEntry, ...]:
        with self._lock:
            released = self._entries.all()
            for entry in released:
                with entry.item.lock:
                    entry.item.update_stock(entry.quantity)
            self._reset()
        logger.info("cart cleared, %d entries released", len(released))
        return released

    def recompute_total(self) -> Decimal:
        return sum_line_totals(self._entries.all())

    # ---- internals ---------------------------------------------------------

    def _find_entry(self, item_id: int) -> CartEntry | None:
        return self._entries.find_by(lambda e: e.item.id == item_id)

    def _recalculate(self) -> None:
        self._total = sum_line_totals(self._entries.all())

    def _reset(self) -> None:
        self._entries.clear()
        self._total = to_amount(0)
