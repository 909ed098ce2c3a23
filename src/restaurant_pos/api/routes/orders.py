from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.api.deps import require_permission
from restaurant_pos.crud.order import (
    add_item_to_order,
    create_order,
    get_order_by_id,
    get_order_totals,
    get_orders,
    update_order_item,
    update_order_status,
)
from restaurant_pos.db.session import get_async_session
from restaurant_pos.models import OrderStatusEnum, User
from restaurant_pos.schemas.order import (
    OrderCreate,
    OrderEnvelope,
    OrderItemCreate,
    OrderItemUpdate,
    OrderList,
    OrderStatusUpdate,
    OrderTotalsRead,
)


router = APIRouter(prefix="/orders", tags=["orders"])

can_order = require_permission("orders")


@router.get("", response_model=OrderList)
async def list_orders(
    status: Optional[OrderStatusEnum] = Query(None, description="Фильтр по статусу"),
    table_id: Optional[int] = Query(None, description="Фильтр по столу"),
    waiter_id: Optional[int] = Query(None, description="Фильтр по официанту"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(can_order),
):
    """
    Возвращает список заказов.
    Поддерживает фильтрацию по статусу, столу и официанту.
    """
    orders = await get_orders(db, status=status, table_id=table_id, waiter_id=waiter_id)
    return OrderList(orders=orders)


@router.get("/{order_id}", response_model=OrderEnvelope)
async def get_order(
    order_id: int = Path(..., description="ID заказа"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(can_order),
):
    """
    Возвращает детализацию заказа по id.
    """
    return OrderEnvelope(order=await get_order_by_id(db, order_id))


@router.get("/{order_id}/totals", response_model=OrderTotalsRead)
async def get_order_totals_endpoint(
    order_id: int,
    tip: Optional[Decimal] = Query(None, ge=0, description="Чаевые суммой"),
    tip_preset: Optional[int] = Query(None, description="Чаевые в процентах: 0, 15 или 20"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(can_order),
):
    """
    Подытог, налог, чаевые и итог к оплате.
    """
    return await get_order_totals(db, order_id, tip=tip, tip_preset=tip_preset)


@router.post("", response_model=OrderEnvelope, status_code=201)
async def create_order_endpoint(
    order_in: OrderCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(can_order),
):
    """
    Возвращает созданный заказ (или активный заказ стола с новыми позициями).
    """
    return OrderEnvelope(order=await create_order(db, user, order_in))


@router.put("/{order_id}/status", response_model=OrderEnvelope)
async def update_order_status_endpoint(
    order_id: int,
    data: OrderStatusUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(can_order),
):
    """
    Смена статуса заказа. Переходы только вперёд, paid - через /payments.
    """
    return OrderEnvelope(order=await update_order_status(db, user, order_id, data.status))


@router.post("/{order_id}/items", response_model=OrderEnvelope)
async def add_item_endpoint(
    order_id: int,
    item_in: OrderItemCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(can_order),
):
    """
    Добавляет позицию. Повторное блюдо увеличивает количество.
    """
    return OrderEnvelope(order=await add_item_to_order(db, order_id, item_in))


@router.put("/{order_id}/items/{item_id}", response_model=OrderEnvelope)
async def update_item_endpoint(
    order_id: int,
    item_id: int,
    item_in: OrderItemUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(can_order),
):
    return OrderEnvelope(order=await update_order_item(db, order_id, item_id, item_in))
