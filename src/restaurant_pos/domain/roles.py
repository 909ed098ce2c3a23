"""
Роли персонала: иерархия, матрица разрешений и правила управления персоналом.
"""
from typing import Dict, FrozenSet, Optional

from restaurant_pos.models.user import RoleEnum


ROLE_LEVELS: Dict[RoleEnum, int] = {
    RoleEnum.host: 1,
    RoleEnum.waiter: 2,
    RoleEnum.chef: 2,
    RoleEnum.manager: 3,
    RoleEnum.owner: 4,
    RoleEnum.admin: 5,
}

ALL = "all"

ROLE_PERMISSIONS: Dict[RoleEnum, FrozenSet[str]] = {
    RoleEnum.host: frozenset({"tables", "menu", "view_staff"}),
    RoleEnum.waiter: frozenset({"tables", "menu", "orders", "payments", "assign_tables", "update_tables"}),
    RoleEnum.chef: frozenset({"tables", "orders", "menu", "view_staff"}),
    RoleEnum.manager: frozenset({"tables", "menu", "orders", "payments", "staff", "assign_tables"}),
    RoleEnum.owner: frozenset({"tables", "menu", "orders", "payments", "staff", "reports", "assign_tables"}),
    RoleEnum.admin: frozenset({ALL}),
}

# кто может менять статус стола
TABLE_STATUS_ROLES = frozenset(
    {RoleEnum.host, RoleEnum.waiter, RoleEnum.manager, RoleEnum.owner, RoleEnum.admin}
)

# кого может создавать / редактировать каждая роль
MANAGEABLE_ROLES: Dict[RoleEnum, FrozenSet[RoleEnum]] = {
    RoleEnum.admin: frozenset(RoleEnum),
    RoleEnum.owner: frozenset({RoleEnum.manager, RoleEnum.waiter, RoleEnum.host, RoleEnum.chef}),
    RoleEnum.manager: frozenset({RoleEnum.waiter, RoleEnum.host, RoleEnum.chef}),
}

# кого может деактивировать каждая роль
DEACTIVATABLE_ROLES: Dict[RoleEnum, FrozenSet[RoleEnum]] = {
    RoleEnum.admin: frozenset(RoleEnum),
    RoleEnum.owner: frozenset({RoleEnum.waiter, RoleEnum.host, RoleEnum.chef, RoleEnum.manager}),
    RoleEnum.manager: frozenset({RoleEnum.waiter, RoleEnum.host, RoleEnum.chef}),
}


def has_role_at_least(role: RoleEnum, required: RoleEnum) -> bool:
    """
    Проверяет, что роль не ниже требуемой по иерархии.
    Админ проходит любую проверку.
    """
    if role == RoleEnum.admin:
        return True
    return ROLE_LEVELS.get(role, 0) >= ROLE_LEVELS.get(required, 0)


def has_permission(role: RoleEnum, permission: str) -> bool:
    permissions = ROLE_PERMISSIONS.get(role, frozenset())
    return ALL in permissions or permission in permissions


def can_change_table_status(role: RoleEnum) -> bool:
    return role in TABLE_STATUS_ROLES


def can_manage_role(actor: Optional[RoleEnum], target: Optional[RoleEnum]) -> bool:
    if actor is None or target is None:
        return False
    return target in MANAGEABLE_ROLES.get(actor, frozenset())


def can_deactivate(actor: RoleEnum, target: RoleEnum) -> bool:
    return target in DEACTIVATABLE_ROLES.get(actor, frozenset())
