from __future__ import annotations

from decimal import Decimal
from typing import Tuple

from retail_core.adapters.outbound.in_memory_orders import InMemoryOrderHistory
from retail_core.adapters.outbound.logging_events import LoggingEventPublisher
from retail_core.config import Settings, settings
from retail_core.core.domain.model.item import Electronics, Item
from retail_core.core.domain.model.order import OrderIdSequence
from retail_core.core.domain.service.commerce_service import (
    CommerceDeps,
    CommerceService,
)


def sample_catalog() -> Tuple[Item, ...]:
    return (
        Electronics(
            id=101,
            name="Gaming Laptop",
            price=Decimal("1299.99"),
            stock=10,
            warranty_months=24,
            brand="ASUS",
        ),
        Electronics(
            id=102,
            name="Smartphone",
            price=Decimal("799.99"),
            stock=15,
            warranty_months=12,
            brand="Samsung",
        ),
        Item(id=201, name="Python Programming Book", price=Decimal("49.99"), stock=20),
    )


def build_service(cfg: Settings | None = None, seed: bool | None = None) -> CommerceService:
    cfg = cfg or settings
    service = CommerceService(
        CommerceDeps(
            orders=InMemoryOrderHistory(),
            events=LoggingEventPublisher(),
            order_ids=OrderIdSequence(),
            order_date=cfg.order_date,
        )
    )

    if cfg.seed_catalog if seed is None else seed:
        for item in sample_catalog():
            service.add_catalog_item(item)
    return service
