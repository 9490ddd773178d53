from __future__ import annotations

from typing import Protocol, Sequence

from returns.result import Result

from retail_core.core.domain.model.errors import RetailError
from retail_core.core.domain.model.order import Order, OrderId


class OrderHistory(Protocol):
    def save(self, order: Order) -> Result[OrderId, RetailError]: ...

    def get(self, order_id: OrderId) -> Result[Order, RetailError]: ...

    def list(self) -> Sequence[Order]: ...
