from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RetailError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationError(RetailError):
    pass


@dataclass(frozen=True)
class NullReferenceError(RetailError):
    pass


@dataclass(frozen=True)
class NotFoundError(RetailError):
    entity_id: int

    def __str__(self) -> str:
        return f"not_found: id={self.entity_id} ({self.message})"


@dataclass(frozen=True)
class InsufficientStockError(RetailError):
    item_id: int
    available: int
    requested: int

    def __str__(self) -> str:
        return (
            f"insufficient_stock: id={self.item_id} "
            f"available={self.available} requested={self.requested} ({self.message})"
        )


@dataclass(frozen=True)
class EmptyCartError(RetailError):
    pass
