from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.api.deps import get_current_user, require_role
from restaurant_pos.crud.menu_item import (
    create_menu_item,
    delete_menu_item,
    get_menu_item,
    get_menu_items,
    update_menu_item,
)
from restaurant_pos.db.session import get_async_session
from restaurant_pos.models import MenuCategoryEnum, RoleEnum, User
from restaurant_pos.schemas.menu_item import (
    MenuItemCreate,
    MenuItemEnvelope,
    MenuItemList,
    MenuItemRead,
    MenuItemUpdate,
)


router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("", response_model=MenuItemList)
async def list_menu_items(
    category: Optional[MenuCategoryEnum] = Query(None, description="Фильтр по категории"),
    available: Optional[bool] = Query(None, description="Только доступные / недоступные"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    items = await get_menu_items(db, category=category, available=available)
    return MenuItemList(menu_items=[MenuItemRead.model_validate(i) for i in items])


@router.get("/{item_id}", response_model=MenuItemEnvelope)
async def get_menu_item_endpoint(
    item_id: int,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return MenuItemEnvelope(menu_item=MenuItemRead.model_validate(await get_menu_item(db, item_id)))


@router.post("", response_model=MenuItemEnvelope, status_code=201)
async def create_menu_item_endpoint(
    data: MenuItemCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_role(RoleEnum.manager)),
):
    return MenuItemEnvelope(menu_item=MenuItemRead.model_validate(await create_menu_item(db, data)))


@router.put("/{item_id}", response_model=MenuItemEnvelope)
async def update_menu_item_endpoint(
    item_id: int,
    data: MenuItemUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_role(RoleEnum.manager)),
):
    item = await update_menu_item(db, item_id, data)
    return MenuItemEnvelope(menu_item=MenuItemRead.model_validate(item))


@router.delete("/{item_id}")
async def delete_menu_item_endpoint(
    item_id: int,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_role(RoleEnum.manager)),
):
    await delete_menu_item(db, item_id)
    return {"message": "Menu item deleted successfully"}
