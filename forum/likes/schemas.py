# forum/likes/schemas.py
from datetime import datetime

from forum.core.schemas import CamelModel


class LikeOut(CamelModel):
    id: int
    user_id: int
    topic_id: int | None = None
    comment_id: int | None = None
    created_at: datetime | None = None


class LikeCreatedOut(LikeOut):
    likes_count: int


class UnlikeOut(CamelModel):
    removed: bool
    likes_count: int
