# forum/topics/repository.py
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from forum.topics.models import Topic


async def create_topic(
    db: AsyncSession,
    *,
    author_id: int,
    title: str,
    content: str,
    category: str,
    image: str | None = None,
    attachment: str | None = None,
    attachment_name: str | None = None,
) -> Topic:
    topic = Topic(
        author_id=author_id,
        title=title,
        content=content,
        category=category,
        image=image,
        attachment=attachment,
        attachment_name=attachment_name,
        likes_count=0,
    )
    db.add(topic)
    await db.flush()
    await db.refresh(topic)
    return topic


async def get_topic(db: AsyncSession, topic_id: int) -> Topic | None:
    res = await db.execute(select(Topic).where(Topic.id == topic_id))
    return res.scalar_one_or_none()


async def list_topics(
    db: AsyncSession,
    *,
    author_id: int | None = None,
    category: str | None = None,
) -> list[Topic]:
    """
    Temas en orden descendente por fecha (id para desempatar),
    filtrando opcionalmente por autor y/o categoría.
    """
    q = select(Topic)
    if author_id is not None:
        q = q.where(Topic.author_id == author_id)
    if category is not None:
        q = q.where(Topic.category == category)
    q = q.order_by(desc(Topic.created_at), desc(Topic.id))
    res = await db.execute(q)
    return list(res.scalars())
