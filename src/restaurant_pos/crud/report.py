from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from restaurant_pos.crud.payment import get_payments
from restaurant_pos.domain.reports import item_frequency_report, order_statistics_report, revenue_report
from restaurant_pos.models import MenuItem, Order


async def get_orders_in_range(db: AsyncSession, date_from: datetime, date_to: datetime) -> List[Order]:
    stmt = (
        select(Order)
        .options(selectinload(Order.items))
        .where(Order.created_at >= date_from, Order.created_at < date_to)
        .order_by(Order.created_at)
    )
    result = await db.execute(stmt)
    return result.scalars().unique().all()


async def get_revenue(db: AsyncSession, date_from: datetime, date_to: datetime) -> dict:
    """
    Выручка за период: по способам оплаты, по дням и сумма чаевых.
    """
    payments = await get_payments(db, date_from, date_to)
    return revenue_report(payments)


async def get_item_frequency(db: AsyncSession, date_from: datetime, date_to: datetime) -> dict:
    """
    Популярность блюд за период. Название берём актуальное из меню,
    а если его там нет - из снимка в заказе.
    """
    orders = await get_orders_in_range(db, date_from, date_to)
    menu_ids = {item.menu_item_id for order in orders for item in order.items}
    menu_names = {}
    if menu_ids:
        result = await db.execute(select(MenuItem.id, MenuItem.name).where(MenuItem.id.in_(sorted(menu_ids))))
        menu_names = {row.id: row.name for row in result.all()}
    return item_frequency_report(orders, menu_names)


async def get_order_statistics(db: AsyncSession, date_from: datetime, date_to: datetime) -> dict:
    """
    Статистика заказов: по статусам, по дням недели, средний чек.
    """
    orders = await get_orders_in_range(db, date_from, date_to)
    return order_statistics_report(orders)
