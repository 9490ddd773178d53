from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Sequence

from returns.result import Failure, Result, Success

from retail_core.core.domain.model.errors import NotFoundError, RetailError, ValidationError
from retail_core.core.domain.model.order import Order, OrderId
from retail_core.core.ports.outbound.orders import OrderHistory


@dataclass
class InMemoryOrderHistory(OrderHistory):
    _store: Dict[int, Order] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def save(self, order: Order) -> Result[OrderId, RetailError]:
        key = order.order_id.value
        with self._lock:
            if key in self._store:
                return Failure(ValidationError(message=f"order #{key} already recorded"))
            self._store[key] = order
        return Success(order.order_id)

    def get(self, order_id: OrderId) -> Result[Order, RetailError]:
        order = self._store.get(order_id.value)
        if order is None:
            return Failure(NotFoundError(message="order not found", entity_id=order_id.value))
        return Success(order)

    def list(self) -> Sequence[Order]:
        with self._lock:
            return tuple(self._store.values())  # insertion order
