"""
Жизненный цикл заказа: new -> in_progress -> done -> delivered -> paid.

Отмена возможна из любого нетерминального статуса, назад переходов нет.
В paid заказ попадает только через создание оплаты.
"""
from typing import Dict, FrozenSet, List, Optional

from restaurant_pos.errors import ValidationError
from restaurant_pos.models.order import OrderStatusEnum


ORDER_TRANSITIONS: Dict[OrderStatusEnum, FrozenSet[OrderStatusEnum]] = {
    OrderStatusEnum.new: frozenset({OrderStatusEnum.in_progress, OrderStatusEnum.cancelled}),
    OrderStatusEnum.in_progress: frozenset({OrderStatusEnum.done, OrderStatusEnum.cancelled}),
    OrderStatusEnum.done: frozenset({OrderStatusEnum.delivered, OrderStatusEnum.cancelled}),
    OrderStatusEnum.delivered: frozenset({OrderStatusEnum.paid, OrderStatusEnum.cancelled}),
    OrderStatusEnum.paid: frozenset(),
    OrderStatusEnum.cancelled: frozenset(),
}

TERMINAL_STATUSES = frozenset({OrderStatusEnum.paid, OrderStatusEnum.cancelled})
ACTIVE_STATUSES = frozenset(OrderStatusEnum) - TERMINAL_STATUSES


def is_terminal(status: OrderStatusEnum) -> bool:
    return OrderStatusEnum(status) in TERMINAL_STATUSES


def can_transition(current: OrderStatusEnum, target: OrderStatusEnum) -> bool:
    return OrderStatusEnum(target) in ORDER_TRANSITIONS[OrderStatusEnum(current)]


def ensure_transition(current: OrderStatusEnum, target: OrderStatusEnum, via_payment: bool = False) -> OrderStatusEnum:
    """
    Проверяет переход статуса заказа и возвращает новый статус.

    Статус paid разрешён только из действия оплаты (via_payment=True).
    """
    current = OrderStatusEnum(current)
    target = OrderStatusEnum(target)

    if target == OrderStatusEnum.paid and not via_payment:
        raise ValidationError("Orders are marked paid only by recording a payment")
    if is_terminal(current):
        raise ValidationError(f"Order is already {current.value} and can no longer change")
    if not can_transition(current, target):
        raise ValidationError(f"Invalid status transition from {current.value} to {target.value}")
    return target


def ensure_item_transition(current: OrderStatusEnum, target: OrderStatusEnum) -> OrderStatusEnum:
    # позиции идут по той же таблице, но paid у них не бывает
    target = OrderStatusEnum(target)
    if target == OrderStatusEnum.paid:
        raise ValidationError("Order items cannot be marked paid")
    current = OrderStatusEnum(current)
    if current == target:
        return target
    if not can_transition(current, target):
        raise ValidationError(f"Invalid item status transition from {current.value} to {target.value}")
    return target


def ensure_editable(status: OrderStatusEnum) -> None:
    if is_terminal(status):
        raise ValidationError(f"Cannot modify items of a {OrderStatusEnum(status).value} order")


def find_line(lines: List, menu_item_id: int) -> Optional[object]:
    for line in lines:
        if getattr(line, "status", None) == OrderStatusEnum.cancelled:
            continue
        if line.menu_item_id == menu_item_id:
            return line
    return None


def merge_line_item(lines: List, menu_item_id: int, quantity: int, notes: Optional[str] = None):
    """
    Добавляет количество к существующей позиции с тем же блюдом.

    Возвращает изменённую позицию или None, если такой позиции ещё нет
    и её нужно создать.
    """
    if quantity < 1:
        raise ValidationError("Quantity must be at least 1")
    line = find_line(lines, menu_item_id)
    if line is None:
        return None
    line.quantity += quantity
    if notes:
        line.notes = notes
    return line
