from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from returns.result import Result

from retail_core.core.domain.model.errors import RetailError
from retail_core.core.domain.model.order import OrderId


@dataclass(frozen=True)
class OrderPlaced:
    order_id: OrderId
    total: Decimal


class EventPublisher(Protocol):
    def publish(self, event: OrderPlaced) -> Result[None, RetailError]: ...
