# forum/likes/repository.py
from __future__ import annotations

from sqlalchemy import select, delete, update, desc
from sqlalchemy.ext.asyncio import AsyncSession

from forum.comments.models import Comment
from forum.likes.models import Like
from forum.topics.models import Topic


async def insert_like(
    db: AsyncSession,
    *,
    user_id: int,
    topic_id: int | None = None,
    comment_id: int | None = None,
) -> Like:
    like = Like(user_id=user_id, topic_id=topic_id, comment_id=comment_id)
    db.add(like)
    # aquí salta IntegrityError si el like ya existía
    await db.flush()
    await db.refresh(like)
    return like


async def delete_like(
    db: AsyncSession,
    *,
    user_id: int,
    topic_id: int | None = None,
    comment_id: int | None = None,
) -> int:
    """Devuelve cuántas filas se borraron (0 o 1)."""
    q = delete(Like).where(Like.user_id == user_id)
    if topic_id is not None:
        q = q.where(Like.topic_id == topic_id)
    else:
        q = q.where(Like.comment_id == comment_id)
    res = await db.execute(q)
    return res.rowcount or 0


# -------------------------
# contadores denormalizados (incremento atómico en la propia BD)
# -------------------------

async def bump_likes_count(db: AsyncSession, model: type[Topic] | type[Comment], target_id: int, delta: int) -> None:
    q = (
        update(model)
        .where(model.id == target_id)
        .values(likes_count=model.likes_count + delta)
        .execution_options(synchronize_session=False)
    )
    if delta < 0:
        # nunca por debajo de cero
        q = q.where(model.likes_count >= -delta)
    await db.execute(q)


async def read_likes_count(db: AsyncSession, model: type[Topic] | type[Comment], target_id: int) -> int:
    res = await db.execute(select(model.likes_count).where(model.id == target_id))
    return int(res.scalar_one_or_none() or 0)


# -------------------------
# listados
# -------------------------

async def list_likes_by_topic(db: AsyncSession, topic_id: int) -> list[Like]:
    res = await db.execute(
        select(Like).where(Like.topic_id == topic_id).order_by(desc(Like.created_at), desc(Like.id))
    )
    return list(res.scalars())


async def list_likes_by_comment(db: AsyncSession, comment_id: int) -> list[Like]:
    res = await db.execute(
        select(Like).where(Like.comment_id == comment_id).order_by(desc(Like.created_at), desc(Like.id))
    )
    return list(res.scalars())


async def list_likes_by_user(db: AsyncSession, user_id: int) -> list[Like]:
    res = await db.execute(
        select(Like).where(Like.user_id == user_id).order_by(desc(Like.created_at), desc(Like.id))
    )
    return list(res.scalars())
