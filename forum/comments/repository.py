# forum/comments/repository.py
from __future__ import annotations

from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from forum.comments.models import Comment


async def create_comment(
    db: AsyncSession,
    *,
    author_id: int,
    topic_id: int,
    content: str,
) -> Comment:
    c = Comment(author_id=author_id, topic_id=topic_id, content=content, likes_count=0)
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


async def get_comment(db: AsyncSession, comment_id: int) -> Comment | None:
    res = await db.execute(select(Comment).where(Comment.id == comment_id))
    return res.scalar_one_or_none()


async def list_topic_comments(db: AsyncSession, topic_id: int) -> list[Comment]:
    # los más nuevos primero (id para desempatar)
    res = await db.execute(
        select(Comment)
        .where(Comment.topic_id == topic_id)
        .order_by(desc(Comment.created_at), desc(Comment.id))
    )
    return list(res.scalars())
