from __future__ import annotations

from dataclasses import dataclass

from returns.result import Failure, Result, Success

from retail_core.core.domain.model.errors import RetailError
from retail_core.core.ports.outbound.events import EventPublisher, OrderPlaced
from retail_core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class LoggingEventPublisher(EventPublisher):
    fail: bool = False

    def publish(self, event: OrderPlaced) -> Result[None, RetailError]:
        if self.fail:
            return Failure(RetailError(message="publisher is down"))
        logger.info(
            "[event] order_placed: #%d total=%s", event.order_id.value, event.total
        )
        return Success(None)
