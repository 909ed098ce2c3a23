from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.db.session import get_async_session

router = APIRouter()


@router.get("/health", summary="Health check")
async def health_check(db: AsyncSession = Depends(get_async_session)):
    """
    Health-check: жив ли сервис и отвечает ли база.
    """
    database = "ok"
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        database = f"error: {e}"

    return {
        "status": "ok",
        "database": database,
        "timestamp": datetime.now(timezone.utc),
    }
