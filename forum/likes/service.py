# forum/likes/service.py
"""
Likes sobre temas y comentarios.

La fila del like y el contador `likes_count` del objetivo se tocan dentro de
la misma transacción de la sesión: el router hace un único commit (o rollback)
para las dos cosas, así el contador no se desvía del número real de likes.

El duplicado lo detecta la BD (UNIQUE user/topic y user/comment); aquí no se
comprueba antes ni se bloquea nada.
"""
from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.comments.models import Comment
from forum.likes.models import Like
from forum.likes import repository as repo
from forum.topics.models import Topic


class LikeConflict(Exception):
    """El usuario ya había dado like a ese objetivo."""


async def like_topic(db: AsyncSession, *, user_id: int, topic: Topic) -> tuple[Like, int]:
    """Devuelve (like, likes_count nuevo). No hace commit."""
    try:
        like = await repo.insert_like(db, user_id=user_id, topic_id=topic.id)
    except IntegrityError as exc:
        raise LikeConflict("already liked this topic") from exc
    await repo.bump_likes_count(db, Topic, topic.id, +1)
    return like, await repo.read_likes_count(db, Topic, topic.id)


async def unlike_topic(db: AsyncSession, *, user_id: int, topic: Topic) -> tuple[bool, int]:
    """
    Devuelve (removed, likes_count). Quitar un like que no existe no hace nada.
    """
    removed = await repo.delete_like(db, user_id=user_id, topic_id=topic.id)
    if removed:
        await repo.bump_likes_count(db, Topic, topic.id, -1)
    return bool(removed), await repo.read_likes_count(db, Topic, topic.id)


async def like_comment(db: AsyncSession, *, user_id: int, comment: Comment) -> tuple[Like, int]:
    try:
        like = await repo.insert_like(db, user_id=user_id, comment_id=comment.id)
    except IntegrityError as exc:
        raise LikeConflict("already liked this comment") from exc
    await repo.bump_likes_count(db, Comment, comment.id, +1)
    return like, await repo.read_likes_count(db, Comment, comment.id)


async def unlike_comment(db: AsyncSession, *, user_id: int, comment: Comment) -> tuple[bool, int]:
    removed = await repo.delete_like(db, user_id=user_id, comment_id=comment.id)
    if removed:
        await repo.bump_likes_count(db, Comment, comment.id, -1)
    return bool(removed), await repo.read_likes_count(db, Comment, comment.id)
