# forum/auth/router.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from forum.auth.dependencies import current_user, session_id_from_request
from forum.core.security import encode_session_cookie
from forum.db.session import get_session
from forum.users.models import User
from forum.users.schemas import UserCreate, UserLogin, UserOut
from forum.users import service as svc

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api", tags=["auth"])

INVALID_CREDENTIALS = "invalid email or password"


def _start_session(request: Request, response: Response, user: User) -> None:
    cfg = request.app.state.settings
    sid = request.app.state.sessions.create(user.id)
    response.set_cookie(
        key=cfg.SESSION_COOKIE_NAME,
        value=encode_session_cookie(sid, cfg.SECRET_KEY, cfg.SESSION_TTL_SECONDS),
        max_age=cfg.SESSION_TTL_SECONDS,
        httponly=True,
        secure=cfg.COOKIE_SECURE,
        samesite="strict" if cfg.COOKIE_SECURE else "lax",
    )


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_session),
):
    try:
        user = await svc.register_user(db, payload)
        await db.commit()
    except ValueError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        await db.rollback()
        log.exception("❌ register falló")
        raise HTTPException(status_code=500, detail="internal error")

    # tras registrarse queda logueado
    _start_session(request, response, user)
    return user


@router.post("/login", response_model=UserOut)
async def login(
    payload: UserLogin,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_session),
):
    try:
        user = await svc.authenticate_user(db, payload.email, payload.password)
    except Exception:
        log.exception("❌ login falló")
        raise HTTPException(status_code=500, detail="internal error")

    # mismo mensaje para email desconocido y contraseña mala
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

    _start_session(request, response, user)
    return user


@router.post("/logout")
async def logout(request: Request, response: Response):
    sid = session_id_from_request(request)
    if sid:
        request.app.state.sessions.destroy(sid)
    response.delete_cookie(request.app.state.settings.SESSION_COOKIE_NAME)
    return {"ok": True}


@router.get("/user", response_model=UserOut)
async def me(user: User = Depends(current_user)):
    return user
