from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from restaurant_pos.models.menu_item import MenuCategoryEnum


class MenuItemRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    category: MenuCategoryEnum
    price: Decimal
    available: bool
    is_special: bool

    class Config:
        from_attributes = True


class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    description: Optional[str] = None
    category: MenuCategoryEnum
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    available: bool = True
    is_special: bool = False


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    description: Optional[str] = None
    category: Optional[MenuCategoryEnum] = None
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    available: Optional[bool] = None
    is_special: Optional[bool] = None

    class Config:
        extra = "forbid"


class MenuItemEnvelope(BaseModel):
    menu_item: MenuItemRead


class MenuItemList(BaseModel):
    menu_items: List[MenuItemRead]
