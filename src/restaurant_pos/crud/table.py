import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.domain.roles import can_change_table_status, has_role_at_least
from restaurant_pos.domain.table_state import apply_table_update
from restaurant_pos.errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from restaurant_pos.models import DiningTable, RoleEnum, TableStatusEnum, User
from restaurant_pos.schemas.table import TableCreate, TableUpdate

logger = logging.getLogger(__name__)


async def get_tables(
    db: AsyncSession,
    status: Optional[TableStatusEnum] = None,
    floor: Optional[int] = None,
    waiter_id: Optional[int] = None,
) -> List[DiningTable]:
    """
    Возвращает столы с опциональной фильтрацией по статусу, этажу и официанту.
    Сортируем по номеру стола.
    """
    stmt = select(DiningTable).order_by(DiningTable.number)

    if status:
        stmt = stmt.where(DiningTable.status == status)
    if floor:
        stmt = stmt.where(DiningTable.floor == floor)
    if waiter_id:
        stmt = stmt.where(DiningTable.waiter_id == waiter_id)

    result = await db.execute(stmt)
    return result.scalars().all()


async def get_table(db: AsyncSession, table_id: int) -> DiningTable:
    table = await db.get(DiningTable, table_id)
    if not table:
        raise NotFoundError("Table not found")
    return table


async def create_table(db: AsyncSession, data: TableCreate) -> DiningTable:
    existing = await db.execute(select(DiningTable.id).where(DiningTable.number == data.number))
    if existing.first():
        raise ConflictError("Table with this number already exists")

    table = DiningTable(
        number=data.number,
        capacity=data.capacity,
        floor=data.floor,
        status=TableStatusEnum.available,
    )
    db.add(table)
    await db.commit()
    await db.refresh(table)
    return table


async def update_table(db: AsyncSession, actor: User, table_id: int, data: TableUpdate) -> DiningTable:
    """
    Обновляет стол: статус, официанта, гостей, бронь.
    Изменение вместимости и этажа доступно менеджеру и выше.
    """
    if not can_change_table_status(actor.role):
        raise PermissionDeniedError("Your role cannot change table status")

    update_data = data.model_dump(exclude_unset=True)
    if {"capacity", "floor"} & update_data.keys() and not has_role_at_least(actor.role, RoleEnum.manager):
        raise PermissionDeniedError("Only managers can change table layout")

    table = await get_table(db, table_id)
    changes = apply_table_update(table, update_data)

    waiter_id = changes.get("waiter_id")
    if waiter_id and waiter_id != table.waiter_id:
        waiter = await db.get(User, waiter_id)
        if not waiter or not waiter.active:
            raise ValidationError("Assigned waiter must be an active staff member")

    previous = table.status
    for key, value in changes.items():
        setattr(table, key, value)

    await db.commit()
    await db.refresh(table)

    if previous != table.status:
        logger.info(
            "Table %s: %s -> %s by user %s", table.number, previous.value, table.status.value, actor.id
        )
    return table


async def release_table(db: AsyncSession, table: DiningTable) -> None:
    """
    Освобождает стол без коммита: вызывается внутри транзакции оплаты.
    """
    changes = apply_table_update(table, {"status": TableStatusEnum.available})
    for key, value in changes.items():
        setattr(table, key, value)
