from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.api.deps import bearer_scheme, get_current_user, require_role
from restaurant_pos.crud.user import authenticate, load_session_user, register_user
from restaurant_pos.db.session import get_async_session
from restaurant_pos.domain.guard import guard_route, roles_for_path
from restaurant_pos.models import RoleEnum, User
from restaurant_pos.schemas.auth import LoginRequest, LoginResponse, ProfileResponse, RouteAccessRead
from restaurant_pos.schemas.user import StaffCreate, StaffEnvelope, StaffRead, UserPublic


router = APIRouter(tags=["auth"])


@router.post("/auth/login", response_model=LoginResponse)
async def login(data: LoginRequest, db: AsyncSession = Depends(get_async_session)):
    """
    Возвращает пользователя и JWT.
    """
    user, token = await authenticate(db, data.email, data.password, data.role)
    return LoginResponse(user=UserPublic.model_validate(user), token=token)


@router.get("/auth/profile", response_model=ProfileResponse)
async def profile(user: User = Depends(get_current_user)):
    return ProfileResponse(user=UserPublic.model_validate(user))


@router.get("/auth/route-access", response_model=RouteAccessRead)
async def route_access(
    path: str = Query(..., description="Маршрут клиента, например /reports"),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Решение защиты маршрута для клиента: пустить, на логин
    или на стартовую страницу роли.
    """
    allowed = roles_for_path(path)

    async def fetch_profile(token: str) -> User:
        return await load_session_user(db, token)

    result = await guard_route(
        credentials.credentials if credentials else None,
        allowed,
        fetch_profile=fetch_profile,
    )
    return RouteAccessRead(
        path=path,
        allowed_roles=list(allowed),
        decision=result.decision,
        location=result.location,
        notice=result.notice,
    )


@router.post("/admin/register", response_model=StaffEnvelope, status_code=201)
async def register(
    data: StaffCreate,
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(require_role(RoleEnum.admin)),
):
    user = await register_user(db, data)
    return StaffEnvelope(staff=StaffRead.model_validate(user))
