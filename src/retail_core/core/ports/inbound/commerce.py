from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from returns.result import Result

from retail_core.core.domain.model.cart import Cart, CartEntry
from retail_core.core.domain.model.errors import RetailError
from retail_core.core.domain.model.item import Amount, Item
from retail_core.core.domain.model.order import Order


class CommerceUseCase(Protocol):
    """Operations available to outer collaborators (CLI demo, HTTP app)."""

    @property
    def cart(self) -> Cart: ...

    def add_catalog_item(self, item: Optional[Item]) -> Result[Item, RetailError]: ...

    def find_item(self, product_id: int) -> Result[Item, RetailError]: ...

    def catalog_items(self, sort_by_price: bool = False) -> Sequence[Item]: ...

    def add_to_cart(
        self, product_id: int, quantity: int
    ) -> Result[CartEntry, RetailError]: ...

    def remove_from_cart(self, product_id: int) -> Result[CartEntry, RetailError]: ...

    def apply_cart_discount(self, rate: Amount) -> Result[Decimal, RetailError]: ...

    def clear_cart(self) -> Sequence[CartEntry]: ...

    def checkout(self) -> Result[Order, RetailError]: ...

    def order_history(self) -> Sequence[Order]: ...

    def find_order(self, order_id: int) -> Result[Order, RetailError]: ...
