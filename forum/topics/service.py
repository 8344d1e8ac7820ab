# forum/topics/service.py
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from forum.comments.repository import list_topic_comments
from forum.comments.service import comment_to_dict
from forum.topics.models import Topic
from forum.users.models import User
from forum.users.repository import get_many
from forum.users.service import author_summary


def topic_to_dict(topic: Topic, author: User | None) -> dict:
    return {
        "id": topic.id,
        "title": topic.title,
        "content": topic.content,
        "category": topic.category,
        "image": topic.image,
        "attachment": topic.attachment,
        "attachment_name": topic.attachment_name,
        "author_id": topic.author_id,
        "likes_count": topic.likes_count or 0,
        "created_at": topic.created_at,
        "author": author_summary(author),
    }


async def hydrate_topics(db: AsyncSession, topics: list[Topic]) -> list[dict]:
    # un solo query para todos los autores
    authors = await get_many(db, (t.author_id for t in topics))
    return [topic_to_dict(t, authors.get(t.author_id)) for t in topics]


async def hydrate_topic_detail(db: AsyncSession, topic: Topic) -> dict:
    """
    Tema + autor + comentarios (cada uno con su autor).
    """
    comments = await list_topic_comments(db, topic.id)
    authors = await get_many(db, [topic.author_id] + [c.author_id for c in comments])

    out = topic_to_dict(topic, authors.get(topic.author_id))
    out["comments"] = [comment_to_dict(c, authors.get(c.author_id)) for c in comments]
    return out
