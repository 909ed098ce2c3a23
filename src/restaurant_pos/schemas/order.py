from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, conint

from restaurant_pos.config import settings
from restaurant_pos.domain.formatting import describe_age
from restaurant_pos.domain.totals import billable_lines, compute_totals
from restaurant_pos.models.order import OrderStatusEnum


class OrderItemRead(BaseModel):
    id: int
    menu_item_id: int
    name: str
    price: Decimal
    quantity: int
    notes: Optional[str] = None
    status: OrderStatusEnum
    line_total: Decimal

    @classmethod
    def from_orm_with_total(cls, item):
        return cls(
            id=item.id,
            menu_item_id=item.menu_item_id,
            name=item.name,
            price=item.price,
            quantity=item.quantity,
            notes=item.notes,
            status=item.status,
            line_total=(item.price * item.quantity).quantize(Decimal("0.01")),
        )


class OrderRead(BaseModel):
    id: int
    table_id: int
    waiter_id: Optional[int] = None
    status: OrderStatusEnum
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = []
    count_items: int
    subtotal: Decimal
    tax: Decimal
    total: Decimal

    @classmethod
    def from_orm_with_totals(cls, order):
        # чаевые появляются только при оплате, здесь итог без них
        totals = compute_totals(billable_lines(order.items), settings.TAX_RATE)
        count = sum(
            item.quantity for item in order.items if item.status != OrderStatusEnum.cancelled
        )

        return cls(
            id=order.id,
            table_id=order.table_id,
            waiter_id=order.waiter_id,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[OrderItemRead.from_orm_with_total(i) for i in order.items],
            count_items=count,
            subtotal=totals.subtotal,
            tax=totals.tax,
            total=totals.total,
        )


class OrderTotalsRead(BaseModel):
    order_id: int
    tax_rate: Decimal
    subtotal: Decimal
    tax: Decimal
    tip: Decimal
    total: Decimal
    tip_presets: List[int]


class KitchenTicket(OrderRead):
    table_number: Optional[int] = None
    waiting: str

    @classmethod
    def from_order(cls, order, now: Optional[datetime] = None):
        base = OrderRead.from_orm_with_totals(order)
        return cls(
            **base.model_dump(),
            table_number=order.table.number if order.table else None,
            waiting=describe_age(order.created_at, now),
        )


class KitchenQueue(BaseModel):
    new: List[KitchenTicket]
    in_progress: List[KitchenTicket]
    done: List[KitchenTicket]
    poll_interval_seconds: int


class OrderItemCreate(BaseModel):
    menu_item_id: int
    quantity: conint(ge=1) = 1
    notes: Optional[str] = None


class OrderCreate(BaseModel):
    table_id: int
    waiter_id: Optional[int] = None
    items: List[OrderItemCreate] = []


class OrderStatusUpdate(BaseModel):
    status: OrderStatusEnum


class OrderItemUpdate(BaseModel):
    quantity: Optional[conint(ge=1)] = None
    notes: Optional[str] = None
    status: Optional[OrderStatusEnum] = None

    class Config:
        extra = "forbid"


class OrderEnvelope(BaseModel):
    order: OrderRead


class OrderList(BaseModel):
    orders: List[OrderRead]
