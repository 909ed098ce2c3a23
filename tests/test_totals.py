from decimal import Decimal
from itertools import permutations
from types import SimpleNamespace

import pytest

from restaurant_pos.domain.totals import billable_lines, compute_totals, resolve_tip, to_money
from restaurant_pos.errors import ValidationError
from restaurant_pos.models import OrderStatusEnum

TAX = Decimal("0.085")


def test_burger_example():
    totals = compute_totals([(Decimal("10.00"), 2)], TAX, tip_preset=15)

    assert totals.subtotal == Decimal("20.00")
    assert totals.tax == Decimal("1.70")
    assert totals.tip == Decimal("3.00")
    assert totals.total == Decimal("24.70")


def test_total_is_sum_of_parts():
    lines = [(Decimal("12.95"), 1), (Decimal("3.95"), 3), (Decimal("2.50"), 2)]
    totals = compute_totals(lines, TAX, tip=Decimal("4.10"))

    assert totals.subtotal == Decimal("29.80")
    assert totals.tax == Decimal("2.53")
    assert totals.total == totals.subtotal + totals.tax + totals.tip


def test_line_order_does_not_matter():
    lines = [(Decimal("0.99"), 3), (Decimal("18.95"), 1), (Decimal("6.95"), 2)]
    results = {compute_totals(list(p), TAX, tip_preset=20) for p in permutations(lines)}
    assert len(results) == 1


def test_tax_rounds_half_up():
    # 0.10 * 0.085 = 0.0085 -> 0.01
    assert compute_totals([(Decimal("0.10"), 1)], TAX).tax == Decimal("0.01")


def test_empty_order_is_zero():
    totals = compute_totals([], TAX)
    assert totals.total == Decimal("0.00")


def test_tip_rules():
    subtotal = Decimal("20.00")
    assert resolve_tip(subtotal) == Decimal("0.00")
    assert resolve_tip(subtotal, tip_preset=20) == Decimal("4.00")
    assert resolve_tip(subtotal, tip=Decimal("2.5")) == Decimal("2.50")

    with pytest.raises(ValidationError):
        resolve_tip(subtotal, tip_preset=12)
    with pytest.raises(ValidationError):
        resolve_tip(subtotal, tip=Decimal("1"), tip_preset=15)
    with pytest.raises(ValidationError):
        resolve_tip(subtotal, tip=Decimal("-1"))


def test_custom_presets():
    assert resolve_tip(Decimal("10.00"), tip_preset=10, presets=(0, 10)) == Decimal("1.00")


def test_to_money_from_float():
    assert to_money(0.1 + 0.2) == Decimal("0.30")


def test_cancelled_items_are_not_billed():
    items = [
        SimpleNamespace(price=Decimal("10.00"), quantity=2, status=OrderStatusEnum.new),
        SimpleNamespace(price=Decimal("5.00"), quantity=1, status=OrderStatusEnum.cancelled),
    ]
    assert billable_lines(items) == [(Decimal("10.00"), 2)]
