"""
Переходы статуса стола и поля, которые при этом заполняются или очищаются.

occupied  -> заполнены waiter_id (обязательно) и guest_count
reserved  -> заполнены поля брони (имя обязательно)
available -> всё перечисленное очищено
"""
import logging
from typing import Any, Dict, FrozenSet

from restaurant_pos.errors import ValidationError
from restaurant_pos.models.table import TableStatusEnum

logger = logging.getLogger(__name__)

TABLE_TRANSITIONS: Dict[TableStatusEnum, FrozenSet[TableStatusEnum]] = {
    TableStatusEnum.available: frozenset({TableStatusEnum.occupied, TableStatusEnum.reserved}),
    TableStatusEnum.occupied: frozenset({TableStatusEnum.available}),
    TableStatusEnum.reserved: frozenset({TableStatusEnum.available, TableStatusEnum.occupied}),
}

OCCUPANCY_FIELDS = ("waiter_id", "guest_count")
RESERVATION_FIELDS = ("reservation_name", "reservation_phone", "reservation_time")


def can_transition_table(current: TableStatusEnum, target: TableStatusEnum) -> bool:
    return current == target or target in TABLE_TRANSITIONS[current]


def apply_table_update(table, update: Dict[str, Any]) -> Dict[str, Any]:
    """
    Проверяет обновление стола и возвращает итоговый набор полей для записи.

    Ничего не меняет в самом объекте: при ошибке валидации частичного
    обновления не бывает.
    """
    current = TableStatusEnum(table.status)
    target = TableStatusEnum(update.get("status") or current)

    if not can_transition_table(current, target):
        raise ValidationError(f"Table cannot change status from {current.value} to {target.value}")

    changes: Dict[str, Any] = {"status": target}

    for key in ("capacity", "floor"):
        if key in update and update[key] is not None:
            if update[key] < 1:
                raise ValidationError(f"Table {key} must be positive")
            changes[key] = update[key]

    def carried(field: str):
        # значение из запроса, иначе текущее, если стол остаётся в том же статусе
        if field in update:
            return update[field]
        return getattr(table, field) if current == target else None

    if target == TableStatusEnum.available:
        for field in OCCUPANCY_FIELDS + RESERVATION_FIELDS:
            changes[field] = None

    elif target == TableStatusEnum.occupied:
        waiter_id = carried("waiter_id")
        if not waiter_id:
            raise ValidationError("Waiter must be assigned to an occupied table")
        guest_count = carried("guest_count")
        if guest_count is not None and guest_count < 1:
            raise ValidationError("Guest count must be positive")
        capacity = changes.get("capacity", table.capacity)
        if guest_count and capacity and guest_count > capacity:
            logger.warning("Table %s seats %s guests over capacity %s", table.number, guest_count, capacity)
        changes["waiter_id"] = waiter_id
        changes["guest_count"] = guest_count
        for field in RESERVATION_FIELDS:
            changes[field] = None

    else:
        reservation_name = carried("reservation_name")
        if not reservation_name:
            raise ValidationError("Reservation name is required for a reserved table")
        changes["reservation_name"] = reservation_name
        changes["reservation_phone"] = carried("reservation_phone")
        changes["reservation_time"] = carried("reservation_time")
        for field in OCCUPANCY_FIELDS:
            changes[field] = None

    return changes
