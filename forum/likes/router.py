# forum/likes/router.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from forum.auth.dependencies import current_user
from forum.comments.repository import get_comment
from forum.db.session import get_session
from forum.likes import repository as repo
from forum.likes import service as svc
from forum.likes.schemas import LikeCreatedOut, LikeOut, UnlikeOut
from forum.topics.repository import get_topic
from forum.users.models import User

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api", tags=["likes"])


def _like_payload(like, likes_count: int) -> dict:
    return {
        "id": like.id,
        "user_id": like.user_id,
        "topic_id": like.topic_id,
        "comment_id": like.comment_id,
        "created_at": like.created_at,
        "likes_count": likes_count,
    }


async def _commit_like(db: AsyncSession, action, **kwargs):
    """
    Ejecuta like/unlike y hace commit de la fila + contador juntos.
    Duplicado → 400; cualquier otro fallo de BD → 500 (con rollback).
    """
    try:
        result = await action(db, **kwargs)
        await db.commit()
        return result
    except svc.LikeConflict as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        await db.rollback()
        log.exception(f"❌ {action.__name__} falló")
        raise HTTPException(status_code=500, detail="internal error")


# -------------------------
# ❤️ temas
# -------------------------

@router.post("/topics/{topic_id}/like", response_model=LikeCreatedOut, status_code=status.HTTP_201_CREATED)
async def like_topic_endpoint(
    topic_id: int,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_session),
):
    topic = await get_topic(db, topic_id)
    if not topic:
        raise HTTPException(status_code=404, detail="topic not found")

    like, count = await _commit_like(db, svc.like_topic, user_id=user.id, topic=topic)
    return _like_payload(like, count)


@router.delete("/topics/{topic_id}/like", response_model=UnlikeOut)
async def unlike_topic_endpoint(
    topic_id: int,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_session),
):
    topic = await get_topic(db, topic_id)
    if not topic:
        raise HTTPException(status_code=404, detail="topic not found")

    removed, count = await _commit_like(db, svc.unlike_topic, user_id=user.id, topic=topic)
    return {"removed": removed, "likes_count": count}


@router.get("/topics/{topic_id}/likes", response_model=List[LikeOut])
async def topic_likes(topic_id: int, db: AsyncSession = Depends(get_session)):
    return await repo.list_likes_by_topic(db, topic_id)


# -------------------------
# ❤️ comentarios
# -------------------------

@router.post("/comments/{comment_id}/like", response_model=LikeCreatedOut, status_code=status.HTTP_201_CREATED)
async def like_comment_endpoint(
    comment_id: int,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_session),
):
    comment = await get_comment(db, comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail="comment not found")

    like, count = await _commit_like(db, svc.like_comment, user_id=user.id, comment=comment)
    return _like_payload(like, count)


@router.delete("/comments/{comment_id}/like", response_model=UnlikeOut)
async def unlike_comment_endpoint(
    comment_id: int,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_session),
):
    comment = await get_comment(db, comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail="comment not found")

    removed, count = await _commit_like(db, svc.unlike_comment, user_id=user.id, comment=comment)
    return {"removed": removed, "likes_count": count}


@router.get("/comments/{comment_id}/likes", response_model=List[LikeOut])
async def comment_likes(comment_id: int, db: AsyncSession = Depends(get_session)):
    return await repo.list_likes_by_comment(db, comment_id)
