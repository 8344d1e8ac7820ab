# forum/likes/models.py
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    Integer,
    DateTime,
    func,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
)
from forum.db.base import Base


class Like(Base):
    """
    Like de un usuario sobre un tema O un comentario (nunca los dos).
    Un usuario solo puede dar like una vez a cada tema / comentario:
    las UNIQUE son las que detectan el duplicado.
    """

    __tablename__ = "likes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        index=True,
        nullable=False,
    )
    topic_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("topics.id"),
        index=True,
        nullable=True,
    )
    comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comments.id"),
        index=True,
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("user_id", "topic_id", name="uq_like_user_topic"),
        UniqueConstraint("user_id", "comment_id", name="uq_like_user_comment"),
        CheckConstraint(
            "(topic_id IS NOT NULL AND comment_id IS NULL)"
            " OR (topic_id IS NULL AND comment_id IS NOT NULL)",
            name="ck_like_single_target",
        ),
    )
