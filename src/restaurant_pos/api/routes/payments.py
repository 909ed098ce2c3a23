from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.api.deps import require_permission
from restaurant_pos.crud.payment import create_payment, get_payment, get_payments
from restaurant_pos.db.session import get_async_session
from restaurant_pos.domain.reports import parse_report_range
from restaurant_pos.models import User
from restaurant_pos.schemas.payment import PaymentCreate, PaymentEnvelope, PaymentList, PaymentRead


router = APIRouter(prefix="/payments", tags=["payments"])

can_pay = require_permission("payments")


@router.post("", response_model=PaymentEnvelope, status_code=201)
async def create_payment_endpoint(
    data: PaymentCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(can_pay),
):
    """
    Оплата заказа. Единственный способ перевести заказ в paid.
    """
    payment = await create_payment(db, user, data)
    return PaymentEnvelope(payment=PaymentRead.model_validate(payment))


@router.get("", response_model=PaymentList)
async def list_payments(
    order_id: Optional[int] = Query(None, description="Оплата конкретного заказа"),
    start_date: Optional[str] = Query(None, description="Начальная дата (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="Конечная дата (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(can_pay),
):
    date_from = date_to = None
    if start_date or end_date:
        date_from, date_to = parse_report_range(start_date, end_date)

    payments = await get_payments(db, date_from, date_to, order_id=order_id)
    return PaymentList(payments=[PaymentRead.model_validate(p) for p in payments])


@router.get("/{payment_id}", response_model=PaymentEnvelope)
async def get_payment_endpoint(
    payment_id: int,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(can_pay),
):
    return PaymentEnvelope(payment=PaymentRead.model_validate(await get_payment(db, payment_id)))
