from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class PaymentCreate(BaseModel):
    order_id: int
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    tip: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    tip_preset: Optional[int] = None
    payment_method: str = Field(..., min_length=1, max_length=32)

    @field_validator("payment_method")
    @classmethod
    def normalize_method(cls, value: str) -> str:
        return value.strip().lower()


class PaymentRead(BaseModel):
    id: int
    order_id: int
    amount: Decimal
    tip: Decimal
    payment_method: str
    payment_date: datetime

    class Config:
        from_attributes = True


class PaymentEnvelope(BaseModel):
    payment: PaymentRead


class PaymentList(BaseModel):
    payments: List[PaymentRead]
