# forum/comments/router.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from forum.auth.dependencies import current_user
from forum.comments import repository as repo
from forum.comments.schemas import CommentCreate, CommentOut
from forum.comments.service import comment_to_dict
from forum.db.session import get_session
from forum.topics.repository import get_topic
from forum.users.models import User

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/topics", tags=["comments"])


@router.post(
    "/{topic_id}/comments",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment_endpoint(
    topic_id: int,
    payload: CommentCreate,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_session),
):
    topic = await get_topic(db, topic_id)
    if not topic:
        raise HTTPException(status_code=404, detail="topic not found")

    try:
        c = await repo.create_comment(
            db,
            author_id=user.id,
            topic_id=topic.id,
            content=payload.content,
        )
        await db.commit()
    except Exception:
        await db.rollback()
        log.exception(f"❌ no se pudo crear el comentario en el tema {topic_id}")
        raise HTTPException(status_code=500, detail="internal error")

    return comment_to_dict(c, user)
