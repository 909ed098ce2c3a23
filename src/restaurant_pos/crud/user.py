import logging
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.domain.roles import can_deactivate, can_manage_role
from restaurant_pos.errors import ConflictError, NotFoundError, PermissionDeniedError, SessionError
from restaurant_pos.models import RoleEnum, User
from restaurant_pos.schemas.user import StaffCreate, StaffUpdate
from restaurant_pos.security import create_access_token, decode_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalars().first()


async def list_users(db: AsyncSession, role: Optional[RoleEnum] = None) -> List[User]:
    """
    Возвращает список персонала.
    Без фильтра по роли админы в список не попадают.
    """
    stmt = select(User).order_by(User.id)
    if role:
        stmt = stmt.where(User.role == role)
    else:
        stmt = stmt.where(User.role != RoleEnum.admin)

    result = await db.execute(stmt)
    return result.scalars().all()


async def authenticate(
    db: AsyncSession, email: str, password: str, role_hint: Optional[RoleEnum] = None
) -> Tuple[User, str]:
    """
    Проверяет email и пароль, возвращает пользователя и JWT.
    Роль с формы логина только логируется: пользователь всегда
    попадает на страницы своей настоящей роли.
    """
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login for %s", email)
        raise SessionError("Invalid credentials")
    if not user.active:
        logger.warning("Inactive account %s tried to log in", email)
        raise SessionError("Account is inactive")

    if role_hint and role_hint != user.role:
        logger.info("User %s logged in as %s via the %s form", user.id, user.role.value, role_hint.value)

    logger.info("User %s (%s) logged in", user.id, user.role.value)
    return user, create_access_token(user)


async def load_session_user(db: AsyncSession, token: str) -> User:
    """
    Загружает пользователя по токену.
    Токен с устаревшей ролью или неактивный пользователь - ошибка сессии.
    """
    claims = decode_access_token(token)
    try:
        user_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise SessionError("Token is invalid or expired")

    user = await db.get(User, user_id)
    if not user or not user.active:
        raise SessionError("Account is no longer active")
    if claims.get("role") != user.role.value:
        raise SessionError("Role has changed, please login again")
    return user


async def _ensure_email_free(db: AsyncSession, email: str, exclude_id: Optional[int] = None) -> None:
    existing = await get_user_by_email(db, email)
    if existing and existing.id != exclude_id:
        raise ConflictError("Email is already in use")


async def register_user(db: AsyncSession, data: StaffCreate) -> User:
    await _ensure_email_free(db, data.email)

    user = User(
        name=data.name,
        email=data.email.lower(),
        password_hash=hash_password(data.password),
        role=data.role,
        active=True,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("Created %s account %s", user.role.value, user.id)
    return user


async def get_staff_member(db: AsyncSession, actor: User, user_id: int) -> User:
    user = await get_user(db, user_id)
    if not user:
        raise NotFoundError("Staff member not found")
    if user.role == RoleEnum.admin and actor.role != RoleEnum.admin:
        raise PermissionDeniedError("Access denied")
    return user


async def create_staff(db: AsyncSession, actor: User, data: StaffCreate) -> User:
    if not can_manage_role(actor.role, data.role):
        raise PermissionDeniedError("You do not have permission to create a staff member with this role")
    return await register_user(db, data)


async def update_staff(db: AsyncSession, actor: User, user_id: int, data: StaffUpdate) -> User:
    """
    Частичное обновление сотрудника.
    Пароль хэшируется, смена роли проверяется по правам того, кто меняет.
    """
    user = await get_staff_member(db, actor, user_id)
    if user.id != actor.id and not can_manage_role(actor.role, user.role):
        raise PermissionDeniedError("You do not have permission to update this staff member")
    update_data = data.model_dump(exclude_unset=True)
    if user.id == actor.id and "active" in update_data:
        raise PermissionDeniedError("You cannot change the active status of your own account")

    if "role" in update_data and not can_manage_role(actor.role, update_data["role"]):
        raise PermissionDeniedError("You do not have permission to update a staff member to this role")

    if update_data.get("email"):
        update_data["email"] = update_data["email"].lower()
        await _ensure_email_free(db, update_data["email"], exclude_id=user.id)

    if update_data.get("password"):
        user.password_hash = hash_password(update_data.pop("password"))
    update_data.pop("password", None)

    for key, value in update_data.items():
        if value is None:
            continue
        setattr(user, key, value)

    await db.commit()
    await db.refresh(user)
    return user


async def deactivate_staff(db: AsyncSession, actor: User, user_id: int) -> User:
    """
    Вместо удаления помечает сотрудника неактивным.
    """
    user = await get_staff_member(db, actor, user_id)
    if not can_deactivate(actor.role, user.role):
        raise PermissionDeniedError("You do not have permission to delete this staff member")

    user.active = False
    await db.commit()
    await db.refresh(user)

    logger.info("User %s deactivated staff member %s", actor.id, user.id)
    return user
