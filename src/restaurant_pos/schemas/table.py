from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from restaurant_pos.models.table import TableStatusEnum


class TableRead(BaseModel):
    id: int
    number: int
    capacity: int
    floor: int
    status: TableStatusEnum
    waiter_id: Optional[int] = None
    guest_count: Optional[int] = None
    reservation_name: Optional[str] = None
    reservation_phone: Optional[str] = None
    reservation_time: Optional[datetime] = None

    class Config:
        from_attributes = True


class TableCreate(BaseModel):
    number: int = Field(..., ge=1)
    capacity: int = Field(..., ge=1)
    floor: int = Field(1, ge=1)


class TableUpdate(BaseModel):
    status: Optional[TableStatusEnum] = None
    waiter_id: Optional[int] = None
    guest_count: Optional[int] = None
    reservation_name: Optional[str] = Field(None, max_length=100)
    reservation_phone: Optional[str] = Field(None, max_length=32)
    reservation_time: Optional[datetime] = None
    capacity: Optional[int] = None
    floor: Optional[int] = None

    class Config:
        extra = "forbid"


class TableEnvelope(BaseModel):
    table: TableRead


class TableList(BaseModel):
    tables: List[TableRead]
