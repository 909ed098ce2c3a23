"""
Подсчёт сумм заказа: подытог, налог, чаевые и итог.

Вся арифметика в Decimal с округлением до цента (ROUND_HALF_UP).
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence, Tuple

from restaurant_pos.errors import ValidationError
from restaurant_pos.models.order import OrderStatusEnum

CENT = Decimal("0.01")
DEFAULT_TIP_PRESETS = (0, 15, 20)


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    tip: Decimal
    total: Decimal


def to_money(value) -> Decimal:
    if isinstance(value, float):
        # через str, чтобы не тащить двоичный хвост float
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def subtotal_of(lines: Iterable[Tuple[Decimal, int]]) -> Decimal:
    total = sum((to_money(price) * quantity for price, quantity in lines), Decimal("0"))
    return total.quantize(CENT)


def tip_from_preset(subtotal: Decimal, preset: int, presets: Sequence[int] = DEFAULT_TIP_PRESETS) -> Decimal:
    if preset not in presets:
        raise ValidationError(f"Tip preset must be one of {', '.join(str(p) for p in presets)}%")
    return (subtotal * Decimal(preset) / Decimal(100)).quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_tip(
    subtotal: Decimal,
    tip: Optional[Decimal] = None,
    tip_preset: Optional[int] = None,
    presets: Sequence[int] = DEFAULT_TIP_PRESETS,
) -> Decimal:
    if tip is not None and tip_preset is not None:
        raise ValidationError("Give either a tip amount or a tip preset, not both")
    if tip_preset is not None:
        return tip_from_preset(subtotal, tip_preset, presets)
    if tip is None:
        return Decimal("0.00")
    tip = to_money(tip)
    if tip < 0:
        raise ValidationError("Tip cannot be negative")
    return tip


def compute_totals(
    lines: Iterable[Tuple[Decimal, int]],
    tax_rate: Decimal,
    tip: Optional[Decimal] = None,
    tip_preset: Optional[int] = None,
    presets: Sequence[int] = DEFAULT_TIP_PRESETS,
) -> OrderTotals:
    subtotal = subtotal_of(lines)
    tax = (subtotal * Decimal(tax_rate)).quantize(CENT, rounding=ROUND_HALF_UP)
    tip_amount = resolve_tip(subtotal, tip, tip_preset, presets)
    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        tip=tip_amount,
        total=subtotal + tax + tip_amount,
    )


def billable_lines(items) -> list:
    """Пары (цена, количество) по позициям заказа без отменённых."""
    return [
        (item.price, item.quantity)
        for item in items
        if item.status != OrderStatusEnum.cancelled
    ]
