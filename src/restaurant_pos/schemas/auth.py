from typing import List, Optional

from pydantic import BaseModel, EmailStr

from restaurant_pos.domain.guard import AccessDecision
from restaurant_pos.models.user import RoleEnum
from restaurant_pos.schemas.user import UserPublic


class LoginRequest(BaseModel):
    email: EmailStr
    # длину не проверяем: неверный пароль любой длины даёт 401
    password: str
    # подсказка с формы логина, на выдачу токена не влияет
    role: Optional[RoleEnum] = None


class LoginResponse(BaseModel):
    user: UserPublic
    token: str


class ProfileResponse(BaseModel):
    user: UserPublic


class RouteAccessRead(BaseModel):
    path: str
    allowed_roles: List[RoleEnum]
    decision: AccessDecision
    location: Optional[str] = None
    notice: Optional[str] = None
