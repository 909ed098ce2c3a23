import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from restaurant_pos.config import settings
from restaurant_pos.db.base import utcnow
from restaurant_pos.domain.order_state import (
    ACTIVE_STATUSES,
    ensure_editable,
    ensure_item_transition,
    ensure_transition,
    merge_line_item,
)
from restaurant_pos.domain.totals import billable_lines, compute_totals
from restaurant_pos.errors import NotFoundError, ValidationError
from restaurant_pos.models import DiningTable, MenuItem, Order, OrderItem, OrderStatusEnum, RoleEnum, TableStatusEnum, User
from restaurant_pos.schemas.order import (
    KitchenQueue,
    KitchenTicket,
    OrderCreate,
    OrderItemCreate,
    OrderItemUpdate,
    OrderRead,
    OrderTotalsRead,
)

logger = logging.getLogger(__name__)

KITCHEN_STATUSES = (OrderStatusEnum.new, OrderStatusEnum.in_progress, OrderStatusEnum.done)

# порядок продвижения позиций вслед за заказом
ITEM_PROGRESSION = [
    OrderStatusEnum.new,
    OrderStatusEnum.in_progress,
    OrderStatusEnum.done,
    OrderStatusEnum.delivered,
]


async def load_order(db: AsyncSession, order_id: int) -> Order:
    """
    Возвращает заказ по ID с подгруженными items и table.
    Предотвращает MissingGreenlet при сериализации.
    """
    stmt = (
        select(Order)
        .where(Order.id == order_id)
        .options(selectinload(Order.items), selectinload(Order.table))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    order = result.scalars().unique().first()
    if not order:
        raise NotFoundError("Order not found")
    return order


async def get_orders(
    db: AsyncSession,
    status: Optional[OrderStatusEnum] = None,
    table_id: Optional[int] = None,
    waiter_id: Optional[int] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> List[OrderRead]:
    """
    Возвращает список заказов с опциональной фильтрацией по статусу, столу,
    официанту и дате. Сортируем по created_at (новые первыми).
    """
    stmt = (
        select(Order)
        .options(selectinload(Order.items))
        .order_by(Order.created_at.desc(), Order.id.desc())
    )

    if status:
        stmt = stmt.where(Order.status == status)
    if table_id:
        stmt = stmt.where(Order.table_id == table_id)
    if waiter_id:
        stmt = stmt.where(Order.waiter_id == waiter_id)
    if date_from:
        stmt = stmt.where(Order.created_at >= date_from)
    if date_to:
        stmt = stmt.where(Order.created_at < date_to)

    result = await db.execute(stmt)
    return [OrderRead.from_orm_with_totals(o) for o in result.scalars().unique().all()]


async def get_order_by_id(db: AsyncSession, order_id: int) -> OrderRead:
    return OrderRead.from_orm_with_totals(await load_order(db, order_id))


async def _add_line(db: AsyncSession, order: Order, item_in: OrderItemCreate) -> None:
    menu_item = await db.get(MenuItem, item_in.menu_item_id)
    if not menu_item:
        raise NotFoundError(f"Menu item with id={item_in.menu_item_id} not found")
    if not menu_item.available:
        raise ValidationError(f"Menu item {menu_item.name} is not available")

    if merge_line_item(order.items, menu_item.id, item_in.quantity, item_in.notes) is None:
        # название и цена фиксируются на момент заказа
        order.items.append(
            OrderItem(
                menu_item_id=menu_item.id,
                name=menu_item.name,
                price=menu_item.price,
                quantity=item_in.quantity,
                notes=item_in.notes,
                status=OrderStatusEnum.new,
            )
        )


async def create_order(db: AsyncSession, actor: User, order_in: OrderCreate) -> OrderRead:
    """
    Создаёт заказ для занятого стола.
    Если у стола уже есть активный заказ, позиции добавляются в него.
    """
    if not order_in.items:
        raise ValidationError("Order must contain at least one item")

    table = await db.get(DiningTable, order_in.table_id)
    if not table:
        raise NotFoundError("Table not found")
    if table.status != TableStatusEnum.occupied:
        raise ValidationError("Cannot create order for a table that is not occupied")

    if order_in.waiter_id is not None:
        waiter = await db.get(User, order_in.waiter_id)
        if not waiter or not waiter.active:
            raise ValidationError("Assigned waiter must be an active staff member")

    result = await db.execute(
        select(Order)
        .where(Order.table_id == table.id, Order.status.in_(list(ACTIVE_STATUSES)))
        .options(selectinload(Order.items))
        .order_by(Order.created_at)
    )
    order = result.scalars().first()

    if order is None:
        waiter_id = order_in.waiter_id or table.waiter_id
        if not waiter_id and actor.role == RoleEnum.waiter:
            waiter_id = actor.id
        order = Order(table_id=table.id, waiter_id=waiter_id, status=OrderStatusEnum.new, items=[])
        db.add(order)
        logger.info("New order for table %s by user %s", table.number, actor.id)
    else:
        logger.info("Appending to active order %s of table %s", order.id, table.number)

    for item_in in order_in.items:
        await _add_line(db, order, item_in)
    order.updated_at = utcnow()

    await db.commit()
    return await get_order_by_id(db, order.id)


def _advance_items(order: Order, status: OrderStatusEnum) -> None:
    if status not in ITEM_PROGRESSION:
        return
    rank = ITEM_PROGRESSION.index(status)
    for item in order.items:
        if item.status in ITEM_PROGRESSION and ITEM_PROGRESSION.index(item.status) < rank:
            item.status = status


async def update_order_status(db: AsyncSession, actor: User, order_id: int, status: OrderStatusEnum) -> OrderRead:
    """
    Меняет статус заказа по таблице переходов.
    paid здесь недоступен: только через создание оплаты.
    """
    order = await load_order(db, order_id)
    previous = order.status
    try:
        order.status = ensure_transition(previous, status)
    except ValidationError:
        logger.warning("Rejected order %s status change %s -> %s", order.id, previous.value, status.value)
        raise

    _advance_items(order, order.status)
    order.updated_at = utcnow()
    await db.commit()

    logger.info("Order %s: %s -> %s by user %s", order.id, previous.value, order.status.value, actor.id)
    return await get_order_by_id(db, order.id)


async def add_item_to_order(db: AsyncSession, order_id: int, item_in: OrderItemCreate) -> OrderRead:
    order = await load_order(db, order_id)
    ensure_editable(order.status)

    await _add_line(db, order, item_in)
    order.updated_at = utcnow()
    await db.commit()
    return await get_order_by_id(db, order.id)


async def update_order_item(db: AsyncSession, order_id: int, item_id: int, item_in: OrderItemUpdate) -> OrderRead:
    """
    Частичное обновление позиции: количество, комментарий, статус.
    """
    order = await load_order(db, order_id)
    item = next((i for i in order.items if i.id == item_id), None)
    if item is None:
        raise NotFoundError("Order or item not found")
    ensure_editable(order.status)

    update_data = item_in.model_dump(exclude_unset=True)
    if update_data.get("status") is not None:
        item.status = ensure_item_transition(item.status, update_data["status"])
    if update_data.get("quantity") is not None:
        item.quantity = update_data["quantity"]
    if "notes" in update_data:
        item.notes = update_data["notes"]

    order.updated_at = utcnow()
    await db.commit()
    return await get_order_by_id(db, order.id)


async def get_order_totals(
    db: AsyncSession,
    order_id: int,
    tip: Optional[Decimal] = None,
    tip_preset: Optional[int] = None,
) -> OrderTotalsRead:
    order = await load_order(db, order_id)
    totals = compute_totals(
        billable_lines(order.items),
        settings.TAX_RATE,
        tip=tip,
        tip_preset=tip_preset,
        presets=settings.TIP_PRESETS,
    )
    return OrderTotalsRead(
        order_id=order.id,
        tax_rate=settings.TAX_RATE,
        subtotal=totals.subtotal,
        tax=totals.tax,
        tip=totals.tip,
        total=totals.total,
        tip_presets=settings.TIP_PRESETS,
    )


async def get_kitchen_queue(db: AsyncSession, now: Optional[datetime] = None) -> KitchenQueue:
    """
    Очередь кухни: заказы new / in_progress / done, старые первыми.
    Клиент опрашивает её раз в poll_interval_seconds.
    """
    result = await db.execute(
        select(Order)
        .where(Order.status.in_(KITCHEN_STATUSES))
        .options(selectinload(Order.items), selectinload(Order.table))
        .order_by(Order.created_at, Order.id)
    )
    orders = result.scalars().unique().all()

    queue = {status: [] for status in KITCHEN_STATUSES}
    for order in orders:
        queue[order.status].append(KitchenTicket.from_order(order, now))

    return KitchenQueue(
        new=queue[OrderStatusEnum.new],
        in_progress=queue[OrderStatusEnum.in_progress],
        done=queue[OrderStatusEnum.done],
        poll_interval_seconds=settings.KITCHEN_POLL_INTERVAL_SECONDS,
    )
