# forum/auth/dependencies.py
from fastapi import Depends, HTTPException, Request, status
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.auth.permissions import (
    ADMIN_ROLES,
    ANY_ROLE,
    STAFF_ROLES,
    AccessDecision,
    check_access,
)
from forum.core.security import decode_session_cookie
from forum.db.session import get_session
from forum.users.models import User
from forum.users.repository import get_by_id


def session_id_from_request(request: Request) -> str | None:
    cfg = request.app.state.settings
    token = request.cookies.get(cfg.SESSION_COOKIE_NAME)
    if not token:
        return None
    try:
        return decode_session_cookie(token, cfg.SECRET_KEY)
    except JWTError:
        # cookie manipulada o vencida → anónimo
        return None


async def get_principal(
    request: Request,
    db: AsyncSession = Depends(get_session),
) -> User | None:
    """Usuario de la sesión actual, o None si es anónimo."""
    sid = session_id_from_request(request)
    if not sid:
        return None
    user_id = request.app.state.sessions.get(sid)
    if user_id is None:
        return None
    return await get_by_id(db, user_id)


def require_roles(required: frozenset[str]):
    async def dependency(principal: User | None = Depends(get_principal)) -> User:
        decision = check_access(principal, required)
        if decision is AccessDecision.UNAUTHENTICATED:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="authentication required")
        if decision is AccessDecision.FORBIDDEN:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden")
        return principal

    return dependency


current_user = require_roles(ANY_ROLE)
staff_user = require_roles(STAFF_ROLES)
admin_user = require_roles(ADMIN_ROLES)
