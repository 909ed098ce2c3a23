from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.crud.user import load_session_user
from restaurant_pos.db.session import get_async_session
from restaurant_pos.domain.roles import has_permission, has_role_at_least
from restaurant_pos.errors import PermissionDeniedError, SessionError
from restaurant_pos.models import RoleEnum, User

bearer_scheme = HTTPBearer(auto_error=False)

ACCESS_DENIED = "Access denied. You do not have the required permission."


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    if credentials is None:
        raise SessionError("No authentication token, access denied")
    return await load_session_user(db, credentials.credentials)


def require_role(required: RoleEnum):
    """
    Пускает пользователя с ролью не ниже required.
    Пример: user: User = Depends(require_role(RoleEnum.manager))
    """
    async def dependency(user: User = Depends(get_current_user)) -> User:
        if not has_role_at_least(user.role, required):
            raise PermissionDeniedError(ACCESS_DENIED)
        return user

    return dependency


def require_permission(permission: str):
    async def dependency(user: User = Depends(get_current_user)) -> User:
        if not has_permission(user.role, permission):
            raise PermissionDeniedError(ACCESS_DENIED)
        return user

    return dependency
