from __future__ import annotations

import threading
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import ClassVar

from returns.result import Failure, Result, Success

from retail_core.core.domain.model.errors import (
    InsufficientStockError,
    RetailError,
    ValidationError,
)
from retail_core.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")
ELECTRONICS_BONUS_RATE = Decimal("0.05")
HANDLING_FEE = Decimal("5.00")

Amount = Decimal | int | float | str


def to_amount(value: Amount) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def validate_rate(rate: Amount) -> Result[Decimal, RetailError]:
    try:
        dec = Decimal(str(rate))
    except ArithmeticError:
        return Failure(ValidationError(message=f"discount rate is not a number: {rate!r}"))
    if not dec.is_finite() or dec < 0 or dec > 1:
        return Failure(
            ValidationError(message=f"discount rate must be between 0.0 and 1.0, got {rate}")
        )
    return Success(dec)


@dataclass(eq=False)
class Item:
    """A sellable catalog entry.

    Identity is the id: two instances with the same id compare equal no matter
    what their other fields hold. ``<`` and ``>`` order by price.
    """

    kind: ClassVar[str] = "product"

    id: int
    name: str
    price: Decimal
    stock: int = 0
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False
    )

    def __post_init__(self) -> None:
        price = to_amount(self.price)
        if price < 0:
            raise ValidationError(message=f"price cannot be negative: {price}")
        if self.stock < 0:
            raise ValidationError(message=f"stock cannot be negative: {self.stock}")
        self.price = price

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def set_price(self, new_price: Amount) -> Result[Decimal, RetailError]:
        try:
            price = to_amount(new_price)
        except ArithmeticError:
            logger.warning("rejected price %r for item %d", new_price, self.id)
            return Failure(ValidationError(message=f"price is not a number: {new_price!r}"))
        if not price.is_finite():
            logger.warning("rejected price %s for item %d", price, self.id)
            return Failure(ValidationError(message=f"price is not a number: {new_price!r}"))
        if price < 0:
            logger.warning("rejected price %s for item %d", price, self.id)
            return Failure(ValidationError(message="price cannot be negative"))
        with self._lock:
            self.price = price
        logger.info("item %d price updated to %s", self.id, price)
        return Success(price)

    def set_stock(self, new_stock: int) -> Result[int, RetailError]:
        if new_stock < 0:
            logger.warning("rejected stock %d for item %d", new_stock, self.id)
            return Failure(ValidationError(message="stock cannot be negative"))
        with self._lock:
            self.stock = new_stock
        logger.info("item %d stock set to %d", self.id, new_stock)
        return Success(new_stock)

    def update_stock(self, delta: int) -> Result[int, RetailError]:
        with self._lock:
            if self.stock + delta < 0:
                logger.warning(
                    "cannot reduce stock of item %d below 0 (stock=%d, delta=%d)",
                    self.id,
                    self.stock,
                    delta,
                )
                return Failure(
                    InsufficientStockError(
                        message="cannot reduce stock below 0",
                        item_id=self.id,
                        available=self.stock,
                        requested=-delta,
                    )
                )
            self.stock += delta
            logger.info("item %d stock %+d (now %d)", self.id, delta, self.stock)
            return Success(self.stock)

    def apply_discount(self, rate: Amount) -> Result[Decimal, RetailError]:
        return validate_rate(rate).map(
            lambda r: to_amount(self.price * (1 - self._effective_rate(r)))
        )

    def _effective_rate(self, rate: Decimal) -> Decimal:
        return rate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: "Item") -> bool:
        return self.price < other.price

    def __gt__(self, other: "Item") -> bool:
        return self.price > other.price


@dataclass(eq=False)
class Electronics(Item):
    kind: ClassVar[str] = "electronics"

    warranty_months: int = 0
    brand: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.warranty_months < 0:
            raise ValidationError(
                message=f"warranty cannot be negative: {self.warranty_months}"
            )

    def update_stock(self, delta: int) -> Result[int, RetailError]:
        result = super().update_stock(delta)
        if delta < 0 and isinstance(result, Success):
            # reported only; no balance in scope to charge against
            logger.info(
                "electronics handling fee of $%s noted for stock reduction of item %d",
                HANDLING_FEE,
                self.id,
            )
        return result

    def _effective_rate(self, rate: Decimal) -> Decimal:
        return min(rate + ELECTRONICS_BONUS_RATE, Decimal(1))
