"""Shared fixtures."""

from __future__ import annotations

from decimal import Decimal

import pytest

from retail_core.adapters.outbound.in_memory_orders import InMemoryOrderHistory
from retail_core.adapters.outbound.logging_events import LoggingEventPublisher
from retail_core.core.domain.model.item import Electronics, Item
from retail_core.core.domain.model.order import OrderIdSequence
from retail_core.core.domain.service.commerce_service import (
    CommerceDeps,
    CommerceService,
)


@pytest.fixture
def item_a() -> Item:
    return Item(id=1, name="Item A", price=Decimal("10.00"), stock=5)


@pytest.fixture
def book() -> Item:
    return Item(id=201, name="Book", price=Decimal("49.99"), stock=20)


@pytest.fixture
def laptop() -> Electronics:
    return Electronics(
        id=101,
        name="Gaming Laptop",
        price=Decimal("1299.99"),
        stock=10,
        warranty_months=24,
        brand="ASUS",
    )


@pytest.fixture
def events() -> LoggingEventPublisher:
    return LoggingEventPublisher()


@pytest.fixture
def service(item_a: Item, book: Item, laptop: Electronics, events) -> CommerceService:
    svc = CommerceService(
        CommerceDeps(
            orders=InMemoryOrderHistory(),
            events=events,
            order_ids=OrderIdSequence(),
            order_date="2024-01-15",
        )
    )
    for it in (item_a, book, laptop):
        svc.add_catalog_item(it)
    return svc
