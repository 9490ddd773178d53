from decimal import Decimal

import pytest
from returns.result import Failure, Success

from retail_core.core.domain.model.errors import (
    InsufficientStockError,
    ValidationError,
)
from retail_core.core.domain.model.item import Electronics, Item


def mk_item(price="100.00", stock=10, item_id=1) -> Item:
    return Item(id=item_id, name="Widget", price=Decimal(price), stock=stock)


def mk_electronics(price="100.00", stock=10, item_id=2) -> Electronics:
    return Electronics(
        id=item_id,
        name="Phone",
        price=Decimal(price),
        stock=stock,
        warranty_months=12,
        brand="Samsung",
    )


class TestConstruction:
    def test_price_is_quantized_to_cents(self):
        assert mk_item(price="10").price == Decimal("10.00")

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            mk_item(price="-1")

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            mk_item(stock=-1)

    def test_negative_warranty_is_rejected(self):
        with pytest.raises(ValidationError):
            Electronics(id=3, name="X", price=Decimal("1"), stock=0, warranty_months=-1)


class TestSetters:
    def test_set_price_accepts_zero_and_positive(self):
        item = mk_item()
        assert item.set_price(Decimal("0")) == Success(Decimal("0.00"))
        assert item.set_price("12.5") == Success(Decimal("12.50"))
        assert item.price == Decimal("12.50")

    def test_set_price_rejects_negative_and_keeps_price(self):
        item = mk_item(price="100.00")
        result = item.set_price(Decimal("-10"))

        assert isinstance(result, Failure)
        assert isinstance(result.failure(), ValidationError)
        assert item.price == Decimal("100.00")

    @pytest.mark.parametrize("bad", ["nan", "abc", "inf", Decimal("NaN")])
    def test_set_price_rejects_non_numeric_and_keeps_price(self, bad):
        item = mk_item(price="100.00")
        result = item.set_price(bad)

        assert isinstance(result, Failure)
        assert isinstance(result.failure(), ValidationError)
        assert item.price == Decimal("100.00")

    def test_set_stock_rejects_negative_and_keeps_stock(self):
        item = mk_item(stock=4)
        result = item.set_stock(-5)

        assert isinstance(result.failure(), ValidationError)
        assert item.stock == 4
        assert item.set_stock(0) == Success(0)
        assert item.stock == 0


class TestUpdateStock:
    @pytest.mark.parametrize("factory", [mk_item, mk_electronics])
    def test_applies_delta_when_result_non_negative(self, factory):
        item = factory(stock=5)
        assert item.update_stock(-5) == Success(0)
        assert item.update_stock(3) == Success(3)
        assert item.stock == 3

    @pytest.mark.parametrize("factory", [mk_item, mk_electronics])
    def test_rejects_delta_that_would_go_negative(self, factory):
        item = factory(stock=2)
        result = item.update_stock(-3)

        err = result.failure()
        assert isinstance(err, InsufficientStockError)
        assert (err.available, err.requested) == (2, 3)
        assert item.stock == 2

    def test_stock_never_negative_after_any_sequence(self):
        item = mk_electronics(stock=3)
        for delta in (-1, -5, 2, -4, -1, 10, -20, 0):
            item.update_stock(delta)
            assert item.stock >= 0
        for value in (-1, 4, -100):
            item.set_stock(value)
            assert item.stock >= 0

    def test_electronics_reports_handling_fee_on_reduction(self, caplog):
        item = mk_electronics(stock=5)
        with caplog.at_level("INFO", logger="retail_core"):
            item.update_stock(-1)
            item.update_stock(1)

        fee_logs = [r for r in caplog.records if "handling fee" in r.getMessage()]
        assert len(fee_logs) == 1


class TestDiscount:
    def test_base_item_discount(self):
        assert mk_item(price="100.00").apply_discount(0.10) == Success(Decimal("90.00"))

    def test_electronics_gets_bonus_rate(self):
        assert mk_electronics(price="100.00").apply_discount(0.10) == Success(
            Decimal("85.00")
        )

    def test_electronics_bonus_is_capped_at_full_discount(self):
        item = mk_electronics(price="100.00")
        assert item.apply_discount(0.97) == Success(Decimal("0.00"))
        assert item.apply_discount(1) == Success(Decimal("0.00"))

    @pytest.mark.parametrize("rate", [1.5, -0.1, "abc"])
    @pytest.mark.parametrize("factory", [mk_item, mk_electronics])
    def test_out_of_range_rate_is_rejected(self, factory, rate):
        item = factory(price="100.00")
        result = item.apply_discount(rate)

        assert isinstance(result.failure(), ValidationError)
        assert result.value_or(item.price) == Decimal("100.00")
        assert item.price == Decimal("100.00")

    def test_discount_is_idempotent(self):
        item = mk_electronics(price="1299.99", stock=7)
        first = item.apply_discount(0.15)
        second = item.apply_discount(0.15)

        assert first == second
        assert item.price == Decimal("1299.99")
        assert item.stock == 7


class TestIdentityAndOrdering:
    def test_equality_is_by_id_only(self):
        a = mk_electronics(price="1299.99", stock=10, item_id=101)
        b = mk_electronics(price="5.00", stock=1, item_id=101)
        c = mk_electronics(item_id=102)

        assert a == b
        assert a != c
        assert hash(a) == hash(b)
        assert a == mk_item(item_id=101)

    def test_ordering_is_by_price(self):
        cheap = mk_item(price="49.99", item_id=1)
        pricey = mk_electronics(price="1299.99", item_id=2)

        assert cheap < pricey
        assert pricey > cheap
        assert sorted([pricey, cheap]) == [cheap, pricey]
