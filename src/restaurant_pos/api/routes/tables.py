from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.api.deps import get_current_user, require_role
from restaurant_pos.crud.table import create_table, get_table, get_tables, update_table
from restaurant_pos.db.session import get_async_session
from restaurant_pos.models import RoleEnum, TableStatusEnum, User
from restaurant_pos.schemas.table import TableCreate, TableEnvelope, TableList, TableRead, TableUpdate


router = APIRouter(prefix="/tables", tags=["tables"])


@router.get("", response_model=TableList)
async def list_tables(
    status: Optional[TableStatusEnum] = Query(None, description="Фильтр по статусу"),
    floor: Optional[int] = Query(None, description="Фильтр по этажу"),
    waiter_id: Optional[int] = Query(None, description="Фильтр по официанту"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tables = await get_tables(db, status=status, floor=floor, waiter_id=waiter_id)
    return TableList(tables=[TableRead.model_validate(t) for t in tables])


@router.get("/{table_id}", response_model=TableEnvelope)
async def get_table_endpoint(
    table_id: int = Path(..., description="ID стола"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return TableEnvelope(table=TableRead.model_validate(await get_table(db, table_id)))


@router.post("", response_model=TableEnvelope, status_code=201)
async def create_table_endpoint(
    data: TableCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_role(RoleEnum.manager)),
):
    return TableEnvelope(table=TableRead.model_validate(await create_table(db, data)))


@router.put("/{table_id}", response_model=TableEnvelope)
async def update_table_endpoint(
    table_id: int,
    data: TableUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Смена статуса стола: посадка гостей, бронь, освобождение.
    Для occupied обязателен waiter_id.
    """
    table = await update_table(db, user, table_id, data)
    return TableEnvelope(table=TableRead.model_validate(table))
