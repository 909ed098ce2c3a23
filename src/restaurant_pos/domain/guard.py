"""
Защита маршрутов клиента по токену и роли.

Решение одно из трёх: пустить, отправить на логин или отправить на
стартовую страницу роли. Профиль подгружается лениво, если токен есть,
а пользователь ещё не загружен.
"""
import enum
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Iterable, Optional, Tuple

from restaurant_pos.errors import SessionError
from restaurant_pos.models.user import RoleEnum, User


LOGIN_PATH = "/"

ROUTE_ROLES: Dict[str, Tuple[RoleEnum, ...]] = {
    "/dashboard": (RoleEnum.waiter, RoleEnum.manager, RoleEnum.owner),
    "/tables": (RoleEnum.host, RoleEnum.waiter, RoleEnum.manager, RoleEnum.owner),
    "/orders": (RoleEnum.waiter, RoleEnum.manager, RoleEnum.owner),
    "/kitchen": (RoleEnum.chef,),
    "/payments": (RoleEnum.waiter, RoleEnum.manager, RoleEnum.owner),
    "/menu": (RoleEnum.manager, RoleEnum.owner),
    "/staff": (RoleEnum.manager, RoleEnum.owner),
    "/reports": (RoleEnum.owner,),
    "/system": (RoleEnum.admin,),
}

ROLE_LANDING: Dict[RoleEnum, str] = {
    RoleEnum.host: "/tables",
    RoleEnum.chef: "/kitchen",
    RoleEnum.admin: "/system",
}
DEFAULT_LANDING = "/dashboard"

SESSION_EXPIRED_NOTICE = "Your session has expired. Please login again."
ACCESS_DENIED_NOTICE = "You don't have permission to access this page."


class AccessDecision(str, enum.Enum):
    authorized = "authorized"
    redirect_to_login = "redirect_to_login"
    redirect_to_role_default = "redirect_to_role_default"


@dataclass(frozen=True)
class GuardResult:
    decision: AccessDecision
    location: Optional[str] = None
    notice: Optional[str] = None


def landing_page(role: RoleEnum) -> str:
    return ROLE_LANDING.get(role, DEFAULT_LANDING)


def roles_for_path(path: str) -> Tuple[RoleEnum, ...]:
    # неизвестный маршрут доступен любому авторизованному
    return ROUTE_ROLES.get(path.rstrip("/") or path, ())


def check_route_access(role: RoleEnum, allowed_roles: Iterable[RoleEnum]) -> GuardResult:
    allowed = tuple(allowed_roles)
    if not allowed or role in allowed:
        return GuardResult(AccessDecision.authorized)
    return GuardResult(
        AccessDecision.redirect_to_role_default,
        location=landing_page(role),
        notice=ACCESS_DENIED_NOTICE,
    )


async def guard_route(
    token: Optional[str],
    allowed_roles: Iterable[RoleEnum],
    user: Optional[User] = None,
    fetch_profile: Optional[Callable[[str], Awaitable[User]]] = None,
) -> GuardResult:
    if not token:
        return GuardResult(AccessDecision.redirect_to_login, location=LOGIN_PATH)

    if user is None:
        if fetch_profile is None:
            return GuardResult(AccessDecision.redirect_to_login, location=LOGIN_PATH)
        try:
            user = await fetch_profile(token)
        except SessionError:
            return GuardResult(
                AccessDecision.redirect_to_login,
                location=LOGIN_PATH,
                notice=SESSION_EXPIRED_NOTICE,
            )

    return check_route_access(user.role, allowed_roles)
