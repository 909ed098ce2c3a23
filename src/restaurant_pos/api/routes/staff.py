from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.api.deps import require_role
from restaurant_pos.crud.user import create_staff, deactivate_staff, get_staff_member, list_users, update_staff
from restaurant_pos.db.session import get_async_session
from restaurant_pos.models import RoleEnum, User
from restaurant_pos.schemas.user import StaffCreate, StaffEnvelope, StaffList, StaffRead, StaffUpdate


router = APIRouter(prefix="/staff", tags=["staff"])

manager = require_role(RoleEnum.manager)


@router.get("", response_model=StaffList)
async def list_staff(
    role: Optional[RoleEnum] = Query(None, description="Фильтр по роли"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(manager),
):
    users = await list_users(db, role=role)
    return StaffList(staff=[StaffRead.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=StaffEnvelope)
async def get_staff_endpoint(
    user_id: int,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(manager),
):
    member = await get_staff_member(db, user, user_id)
    return StaffEnvelope(staff=StaffRead.model_validate(member))


@router.post("", response_model=StaffEnvelope, status_code=201)
async def create_staff_endpoint(
    data: StaffCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(manager),
):
    member = await create_staff(db, user, data)
    return StaffEnvelope(staff=StaffRead.model_validate(member))


@router.put("/{user_id}", response_model=StaffEnvelope)
async def update_staff_endpoint(
    user_id: int,
    data: StaffUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(manager),
):
    member = await update_staff(db, user, user_id, data)
    return StaffEnvelope(staff=StaffRead.model_validate(member))


@router.delete("/{user_id}")
async def deactivate_staff_endpoint(
    user_id: int,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(manager),
):
    """
    Сотрудник не удаляется, а деактивируется.
    """
    await deactivate_staff(db, user, user_id)
    return {"message": "Staff member deactivated successfully"}
