from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.api.deps import require_role
from restaurant_pos.crud.report import get_item_frequency, get_order_statistics, get_revenue
from restaurant_pos.db.session import get_async_session
from restaurant_pos.domain.reports import parse_report_range
from restaurant_pos.models import RoleEnum, User
from restaurant_pos.schemas.report import ItemFrequencyReport, OrderStatisticsReport, RevenueReport


router = APIRouter(prefix="/reports", tags=["reports"])

owner = require_role(RoleEnum.owner)


def _range_fields(date_from, date_to) -> dict:
    return {"start_date": date_from.date(), "end_date": (date_to - timedelta(days=1)).date()}


@router.get("/revenue", response_model=RevenueReport)
async def revenue(
    start_date: Optional[str] = Query(None, description="Начальная дата (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="Конечная дата (YYYY-MM-DD), включительно"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(owner),
):
    """
    Выручка по способам оплаты и по дням, сумма чаевых.
    """
    date_from, date_to = parse_report_range(start_date, end_date)
    report = await get_revenue(db, date_from, date_to)
    return RevenueReport(**_range_fields(date_from, date_to), **report)


@router.get("/item-frequency", response_model=ItemFrequencyReport)
async def item_frequency(
    start_date: Optional[str] = Query(None, description="Начальная дата (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="Конечная дата (YYYY-MM-DD), включительно"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(owner),
):
    """
    Популярность блюд: сколько раз блюдо встречалось в заказах.
    """
    date_from, date_to = parse_report_range(start_date, end_date)
    report = await get_item_frequency(db, date_from, date_to)
    return ItemFrequencyReport(**_range_fields(date_from, date_to), **report)


@router.get("/order-statistics", response_model=OrderStatisticsReport)
async def order_statistics(
    start_date: Optional[str] = Query(None, description="Начальная дата (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="Конечная дата (YYYY-MM-DD), включительно"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(owner),
):
    """
    Заказы по статусам и дням недели, средний чек.
    """
    date_from, date_to = parse_report_range(start_date, end_date)
    report = await get_order_statistics(db, date_from, date_to)
    return OrderStatisticsReport(**_range_fields(date_from, date_to), **report)
