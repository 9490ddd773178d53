from __future__ import annotations

import threading
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Sequence

from returns.pipeline import flow
from returns.pointfree import bind, map_
from returns.result import Failure, Result, Success

from retail_core.core.domain.model.cart import Cart, CartEntry
from retail_core.core.domain.model.container import Container
from retail_core.core.domain.model.errors import (
    EmptyCartError,
    NotFoundError,
    NullReferenceError,
    RetailError,
    ValidationError,
)
from retail_core.core.domain.model.item import Amount, Item
from retail_core.core.domain.model.order import Order, OrderId, OrderIdSequence
from retail_core.core.ports.inbound.commerce import CommerceUseCase
from retail_core.core.ports.outbound.events import EventPublisher, OrderPlaced
from retail_core.core.ports.outbound.orders import OrderHistory
from retail_core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommerceDeps:
    orders: OrderHistory
    events: EventPublisher
    order_ids: OrderIdSequence = field(default_factory=OrderIdSequence)
    order_date: str | None = None  # fixed label for every order; today's date when None


@dataclass
class CommerceService(CommerceUseCase):
    """Owns the catalog, the active cart and the order history.

    Every id-based request is resolved against the catalog first and then
    handed to the cart. Checkout is the only way an order comes to exist.
    """

    deps: CommerceDeps
    _catalog: Container[Item] = field(default_factory=Container)
    _cart: Cart = field(default_factory=Cart)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @property
    def cart(self) -> Cart:
        return self._cart

    # ---- catalog -----------------------------------------------------------

    def add_catalog_item(self, item: Optional[Item]) -> Result[Item, RetailError]:
        if item is None:
            logger.warning("rejected catalog add: no item given")
            return Failure(
                NullReferenceError(message="cannot add a missing item to the catalog")
            )
        with self._lock:
            if self._catalog.contains(item):
                logger.warning("rejected catalog add: duplicate id %d", item.id)
                return Failure(
                    ValidationError(message=f"item id {item.id} already in catalog")
                )
            self._catalog.add(item)
        logger.info("added '%s' to catalog", item.name)
        return Success(item)

    def find_item(self, product_id: int) -> Result[Item, RetailError]:
        item = self._catalog.find_by(lambda it: it.id == product_id)
        if item is None:
            logger.warning("product %d not found in catalog", product_id)
            return Failure(
                NotFoundError(message="product not found in catalog", entity_id=product_id)
            )
        return Success(item)

    def catalog_items(self, sort_by_price: bool = False) -> Sequence[Item]:
        items = self._catalog.all()
        if sort_by_price:
            return tuple(sorted(items))
        return items

    # ---- cart --------------------------------------------------------------

    def add_to_cart(
        self, product_id: int, quantity: int
    ) -> Result[CartEntry, RetailError]:
        logger.info("adding product %d (qty %d) to cart", product_id, quantity)
        return self.find_item(product_id).bind(
            lambda item: self._cart.add_product(item, quantity)
        )

    def remove_from_cart(self, product_id: int) -> Result[CartEntry, RetailError]:
        logger.info("removing product %d from cart", product_id)
        return self.find_item(product_id).bind(self._cart.remove_product)

    def apply_cart_discount(self, rate: Amount) -> Result[Decimal, RetailError]:
        return self._cart.apply_discount(rate)

    def clear_cart(self) -> Sequence[CartEntry]:
        return self._cart.clear()

    # ---- orders ------------------------------------------------------------

    def checkout(self) -> Result[Order, RetailError]:
        with self._lock, self._cart.lock:
            if self._cart.is_empty():
                logger.warning("checkout rejected: cart is empty")
                return Failure(
                    EmptyCartError(message="cannot checkout, shopping cart is empty")
                )
            return flow(
                Order.create(self._cart, self.deps.order_ids, self.deps.order_date),
                bind(self._persist),
                map_(self._settle),
                map_(self._publish),
            )

    def order_history(self) -> Sequence[Order]:
        return self.deps.orders.list()

    def find_order(self, order_id: int) -> Result[Order, RetailError]:
        return self.deps.orders.get(OrderId(order_id))

    # ---- side effects ------------------------------------------------------

    def _persist(self, order: Order) -> Result[Order, RetailError]:
        return self.deps.orders.save(order).map(lambda _: order)

    def _settle(self, order: Order) -> Order:
        self._cart.clear()
        logger.info(
            "order #%d confirmed: %d lines, total %s",
            order.order_id.value,
            order.item_count(),
            order.total,
        )
        return order

    def _publish(self, order: Order) -> Order:
        published = self.deps.events.publish(OrderPlaced(order.order_id, order.total))
        if isinstance(published, Failure):
            logger.warning(
                "order #%d placed but event not published: %s",
                order.order_id.value,
                published.failure(),
            )
        return order
