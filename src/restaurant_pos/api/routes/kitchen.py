from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.api.deps import require_permission
from restaurant_pos.crud.order import get_kitchen_queue
from restaurant_pos.db.session import get_async_session
from restaurant_pos.models import User
from restaurant_pos.schemas.order import KitchenQueue


router = APIRouter(prefix="/kitchen", tags=["kitchen"])


@router.get("/orders", response_model=KitchenQueue)
async def kitchen_orders(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_permission("orders")),
):
    """
    Экран кухни. Клиент перезапрашивает его раз в poll_interval_seconds,
    последний ответ сервера считается актуальным.
    """
    return await get_kitchen_queue(db)
