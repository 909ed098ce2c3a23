"""
Отчёты: чистые свёртки по уже загруженным оплатам и заказам.

Ничего не пишут в базу. Пустой набор данных даёт отчёт с no_data=True,
а не ошибку.
"""
from collections import Counter, defaultdict
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from restaurant_pos.domain.totals import CENT, billable_lines, subtotal_of
from restaurant_pos.errors import ValidationError
from restaurant_pos.models.order import OrderStatusEnum

# порядок дней как в отчёте: с воскресенья
WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
REPORT_WEEKDAYS = ["Sunday"] + WEEKDAY_NAMES[:6]


def parse_report_range(start_date: Optional[str], end_date: Optional[str]) -> Tuple[datetime, datetime]:
    """
    Разбирает границы отчёта в формате YYYY-MM-DD.
    Возвращает [start, end) в UTC, день end_date входит в диапазон.
    """
    if not start_date or not end_date:
        raise ValidationError("Start date and end date are required")
    try:
        start = date.fromisoformat(start_date)
        end = date.fromisoformat(end_date)
    except ValueError:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD format.")
    if end < start:
        raise ValidationError("End date must not be before start date")

    return (
        datetime.combine(start, time.min, tzinfo=timezone.utc),
        datetime.combine(end + timedelta(days=1), time.min, tzinfo=timezone.utc),
    )


def revenue_report(payments: Iterable) -> dict:
    total_revenue = Decimal("0.00")
    total_tips = Decimal("0.00")
    by_method: Dict[str, Decimal] = defaultdict(lambda: Decimal("0.00"))
    by_day: Dict[str, Decimal] = defaultdict(lambda: Decimal("0.00"))
    count = 0

    for payment in payments:
        amount = Decimal(payment.amount)
        total_revenue += amount
        total_tips += Decimal(payment.tip or 0)
        by_method[payment.payment_method] += amount
        by_day[payment.payment_date.date().isoformat()] += amount
        count += 1

    return {
        "no_data": count == 0,
        "payment_count": count,
        "total_revenue": total_revenue.quantize(CENT),
        "total_tips": total_tips.quantize(CENT),
        "revenue_by_method": {k: v.quantize(CENT) for k, v in sorted(by_method.items())},
        "daily_revenue": {k: v.quantize(CENT) for k, v in sorted(by_day.items())},
    }


def item_frequency_report(orders: Iterable, menu_names: Optional[Dict[int, str]] = None) -> dict:
    """
    Сколько раз каждое блюдо встречалось в заказах.
    Сортировка: по count по убыванию, при равенстве по названию.
    """
    menu_names = menu_names or {}
    counts: Counter = Counter()
    quantities: Counter = Counter()
    names: Dict[int, str] = {}

    for order in orders:
        for item in order.items:
            counts[item.menu_item_id] += 1
            quantities[item.menu_item_id] += item.quantity
            names.setdefault(item.menu_item_id, item.name)

    ranked: List[dict] = [
        {
            "menu_item_id": menu_item_id,
            "name": menu_names.get(menu_item_id, names[menu_item_id]),
            "count": count,
            "quantity": quantities[menu_item_id],
        }
        for menu_item_id, count in counts.items()
    ]
    ranked.sort(key=lambda row: (-row["count"], row["name"], row["menu_item_id"]))

    return {"no_data": not ranked, "item_frequency": ranked}


def order_statistics_report(orders: Iterable) -> dict:
    by_status = {status.value: 0 for status in OrderStatusEnum}
    by_weekday = {name: 0 for name in REPORT_WEEKDAYS}
    total_orders = 0
    billed_orders = 0
    billed_amount = Decimal("0.00")

    for order in orders:
        total_orders += 1
        by_status[OrderStatusEnum(order.status).value] += 1
        by_weekday[WEEKDAY_NAMES[order.created_at.weekday()]] += 1
        # средний чек считаем без отменённых заказов
        if order.status != OrderStatusEnum.cancelled:
            billed_orders += 1
            billed_amount += subtotal_of(billable_lines(order.items))

    average = (billed_amount / billed_orders).quantize(CENT) if billed_orders else Decimal("0.00")

    return {
        "no_data": total_orders == 0,
        "total_orders": total_orders,
        "orders_by_status": by_status,
        "orders_by_day_of_week": by_weekday,
        "average_order_amount": average,
    }
