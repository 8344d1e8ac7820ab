# forum/topics/models.py
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    Integer,
    Text,
    DateTime,
    func,
    ForeignKey,
    CheckConstraint,
)
from forum.db.base import Base

# categorías fijas del foro (las mismas que muestra el front)
TOPIC_CATEGORIES: tuple[str, ...] = (
    "Общие обсуждения",
    "Новости",
    "Вопросы",
    "Идеи и предложения",
)


class Topic(Base):
    __tablename__ = "topics"
    __table_args__ = (
        CheckConstraint("likes_count >= 0", name="ck_topic_likes_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # rutas públicas /uploads/... (los bytes los guarda forum.media.storage)
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    attachment: Mapped[str | None] = mapped_column(String(255), nullable=True)
    attachment_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )

    # ❤️ contador de likes (denormalizado, lo mantiene forum.likes.service)
    likes_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
