# forum/users/router.py
import logging
from typing import List

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Request,
    UploadFile,
    File,
    Form,
    status,
)
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.auth.dependencies import admin_user, current_user, staff_user
from forum.core.errors import INVALID_JSON, validation_detail
from forum.db.session import get_session
from forum.likes.repository import list_likes_by_user
from forum.likes.schemas import LikeOut
from forum.media.storage import UploadRejected, delete_uploads, has_file, save_image
from forum.users import service as svc
from forum.users.models import User
from forum.users.repository import list_users
from forum.users.schemas import RoleUpdate, UserOut

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/users", tags=["users"])


@router.patch("/profile", response_model=UserOut)
async def update_my_profile(
    request: Request,
    username: str | None = Form(None),
    bio: str | None = Form(None),
    avatar: UploadFile | None = File(None),
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_session),
):
    """
    Actualiza nombre, bio y/o avatar del usuario logueado (multipart).
    Si la actualización falla, el avatar recién subido se borra.
    """
    cfg = request.app.state.settings
    # tras un rollback `user` queda expirado: el id se lee antes
    user_id = user.id

    avatar_path = None
    if has_file(avatar):
        try:
            avatar_path = save_image(avatar, cfg.UPLOAD_DIR, cfg.UPLOAD_MAX_BYTES)
        except UploadRejected as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    saved = [avatar_path] if avatar_path else []
    try:
        updated = await svc.update_profile(db, user, username=username, bio=bio, avatar=avatar_path)
        await db.commit()
    except ValueError as e:
        await db.rollback()
        delete_uploads(saved, cfg.UPLOAD_DIR)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        await db.rollback()
        delete_uploads(saved, cfg.UPLOAD_DIR)
        log.exception(f"❌ no se pudo actualizar el perfil de {user_id}")
        raise HTTPException(status_code=500, detail="internal error")

    return updated


@router.get("/me/likes", response_model=List[LikeOut])
async def my_likes(
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_session),
):
    return await list_likes_by_user(db, user.id)


@router.get("", response_model=List[UserOut])
async def users_list(
    _: User = Depends(staff_user),
    db: AsyncSession = Depends(get_session),
):
    return await list_users(db)


@router.patch("/{user_id}/role", response_model=UserOut)
async def update_user_role(
    user_id: int,
    request: Request,
    admin: User = Depends(admin_user),
    db: AsyncSession = Depends(get_session),
):
    """
    Solo admins. El cuerpo se lee aquí dentro, después del control de rol:
    un no-admin recibe 403 aunque mande un JSON roto.
    """
    try:
        payload = RoleUpdate.model_validate(await request.json())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=validation_detail(e))
    except ValueError:
        # JSON mal formado (JSONDecodeError / UnicodeDecodeError)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_JSON)

    try:
        updated = await svc.change_role(db, user_id, payload.role)
        await db.commit()
    except ValueError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except svc.UserNotFound:
        await db.rollback()
        raise HTTPException(status_code=404, detail="user not found")
    except Exception:
        await db.rollback()
        log.exception(f"❌ no se pudo cambiar el rol del usuario {user_id}")
        raise HTTPException(status_code=500, detail="internal error")

    log.info(f"🔑 {admin.username} cambió el rol de {updated.username} a {updated.role}")
    return updated
