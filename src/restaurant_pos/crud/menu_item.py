from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.errors import ConflictError, NotFoundError
from restaurant_pos.models import MenuCategoryEnum, MenuItem, OrderItem
from restaurant_pos.schemas.menu_item import MenuItemCreate, MenuItemUpdate


async def get_menu_items(
    db: AsyncSession,
    category: Optional[MenuCategoryEnum] = None,
    available: Optional[bool] = None,
) -> List[MenuItem]:
    stmt = select(MenuItem).order_by(MenuItem.category, MenuItem.name)
    if category:
        stmt = stmt.where(MenuItem.category == category)
    if available is not None:
        stmt = stmt.where(MenuItem.available == available)

    result = await db.execute(stmt)
    return result.scalars().all()


async def get_menu_item(db: AsyncSession, item_id: int) -> MenuItem:
    item = await db.get(MenuItem, item_id)
    if not item:
        raise NotFoundError("Menu item not found")
    return item


async def create_menu_item(db: AsyncSession, data: MenuItemCreate) -> MenuItem:
    item = MenuItem(**data.model_dump())
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item


async def update_menu_item(db: AsyncSession, item_id: int, data: MenuItemUpdate) -> MenuItem:
    """
    Обновляет позицию меню.
    Цена в уже созданных заказах не меняется: она зафиксирована в order_items.
    """
    item = await get_menu_item(db, item_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is None and key != "description":
            continue
        setattr(item, key, value)

    await db.commit()
    await db.refresh(item)
    return item


async def delete_menu_item(db: AsyncSession, item_id: int) -> None:
    item = await get_menu_item(db, item_id)

    used = await db.execute(select(OrderItem.id).where(OrderItem.menu_item_id == item_id).limit(1))
    if used.first():
        raise ConflictError("Menu item is referenced by orders; mark it unavailable instead")

    await db.delete(item)
    await db.commit()
