# forum/users/service.py
from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.core.security import hash_password, verify_password
from forum.users.models import User, UserRole
from forum.users.repository import (
    get_by_username,
    get_by_email,
    get_by_id,
    create_user,
    update_user,
)
from forum.users.schemas import UserCreate

ROLE_VALUES = {r.value for r in UserRole}

# hash de relleno: un email desconocido cuesta lo mismo que una contraseña mala
_DUMMY_HASH = hash_password("forum-dummy-password")

# cómo nombra cada motor el índice único de email (sqlite / postgres)
_EMAIL_MARKERS = ("users.email", "ix_users_email", "(email)")


class UserNotFound(LookupError):
    pass


def _duplicate_message(exc: IntegrityError) -> str:
    """Traduce el UNIQUE violado por la BD al mismo mensaje que la comprobación previa."""
    text = str(exc.orig)
    if any(marker in text for marker in _EMAIL_MARKERS):
        return "email already exists"
    return "username already exists"


async def register_user(db: AsyncSession, data: UserCreate) -> User:
    if await get_by_email(db, data.email):
        raise ValueError("email already exists")
    if await get_by_username(db, data.username):
        raise ValueError("username already exists")

    # El commit lo hace el router; si otra petición se coló entre la
    # comprobación y el insert, el UNIQUE de la BD manda
    try:
        return await create_user(db, data.username, data.email, hash_password(data.password))
    except IntegrityError as exc:
        raise ValueError(_duplicate_message(exc)) from exc


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    """None tanto si el email no existe como si la contraseña no cuadra."""
    user = await get_by_email(db, email)
    if not user:
        verify_password(password, _DUMMY_HASH)
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


async def update_profile(
    db: AsyncSession,
    user: User,
    *,
    username: str | None = None,
    bio: str | None = None,
    avatar: str | None = None,
) -> User:
    changes: dict = {}

    if username:
        username = username.strip()
        if not 3 <= len(username) <= 50:
            raise ValueError("username must be between 3 and 50 characters")
        existing = await get_by_username(db, username)
        if existing and existing.id != user.id:
            raise ValueError("username already exists")
        changes["username"] = username

    if bio is not None:
        changes["bio"] = bio

    if avatar:
        changes["avatar"] = avatar

    if not changes:
        return user
    try:
        return await update_user(db, user, **changes)
    except IntegrityError as exc:
        raise ValueError(_duplicate_message(exc)) from exc


async def change_role(db: AsyncSession, user_id: int, role: str) -> User:
    if role not in ROLE_VALUES:
        raise ValueError("invalid role")
    user = await get_by_id(db, user_id)
    if not user:
        raise UserNotFound(user_id)
    return await update_user(db, user, role=role)


def author_summary(user: User | None) -> dict | None:
    """Lo que se incrusta como `author` en temas y comentarios."""
    if user is None:
        return None
    return {
        "id": user.id,
        "username": user.username,
        "role": user.role,
        "avatar": user.avatar,
    }
