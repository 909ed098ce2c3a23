import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.config import settings
from restaurant_pos.crud.order import load_order
from restaurant_pos.crud.table import release_table
from restaurant_pos.db.base import utcnow
from restaurant_pos.domain.order_state import ACTIVE_STATUSES, ensure_transition
from restaurant_pos.domain.totals import billable_lines, resolve_tip, subtotal_of
from restaurant_pos.errors import ConflictError, NotFoundError
from restaurant_pos.models import Order, OrderStatusEnum, Payment, TableStatusEnum, User

logger = logging.getLogger(__name__)


async def create_payment(db: AsyncSession, actor: User, payment_in) -> Payment:
    """
    Фиксирует оплату заказа.

    Переход заказа в paid и запись оплаты идут одним коммитом. Если у стола
    не осталось других активных заказов, стол освобождается.
    """
    order = await load_order(db, payment_in.order_id)

    existing = await db.execute(select(Payment.id).where(Payment.order_id == order.id))
    if order.status == OrderStatusEnum.paid or existing.first():
        raise ConflictError("Order is already paid")

    others = await db.execute(
        select(Order.id).where(
            Order.table_id == order.table_id,
            Order.id != order.id,
            Order.status.in_(list(ACTIVE_STATUSES)),
        )
    )
    last_on_table = others.first() is None

    order.status = ensure_transition(order.status, OrderStatusEnum.paid, via_payment=True)
    order.updated_at = utcnow()

    tip = resolve_tip(
        subtotal_of(billable_lines(order.items)),
        tip=payment_in.tip,
        tip_preset=payment_in.tip_preset,
        presets=settings.TIP_PRESETS,
    )
    payment = Payment(
        order_id=order.id,
        amount=payment_in.amount,
        tip=tip,
        payment_method=payment_in.payment_method,
    )
    db.add(payment)

    # стол освобождаем, только если за ним всё ещё та же посадка
    table = order.table
    same_seating = (
        table is not None
        and table.status == TableStatusEnum.occupied
        and (order.waiter_id is None or table.waiter_id == order.waiter_id)
    )
    table_released = False
    if same_seating and last_on_table:
        await release_table(db, order.table)
        table_released = True

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Order is already paid")
    await db.refresh(payment)

    logger.info(
        "Order %s paid: amount=%s tip=%s method=%s by user %s%s",
        order.id,
        payment.amount,
        payment.tip,
        payment.payment_method,
        actor.id,
        ", table released" if table_released else "",
    )
    return payment


async def get_payment(db: AsyncSession, payment_id: int) -> Payment:
    payment = await db.get(Payment, payment_id)
    if not payment:
        raise NotFoundError("Payment not found")
    return payment


async def get_payments(
    db: AsyncSession,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    order_id: Optional[int] = None,
) -> List[Payment]:
    """
    Оплаты за период [date_from, date_to), по дате оплаты.
    """
    stmt = select(Payment).order_by(Payment.payment_date, Payment.id)
    if order_id:
        stmt = stmt.where(Payment.order_id == order_id)
    if date_from:
        stmt = stmt.where(Payment.payment_date >= date_from)
    if date_to:
        stmt = stmt.where(Payment.payment_date < date_to)

    result = await db.execute(stmt)
    return result.scalars().all()
