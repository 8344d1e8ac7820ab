# forum/topics/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from forum.comments.schemas import CommentOut
from forum.core.schemas import CamelModel
from forum.topics.models import TOPIC_CATEGORIES
from forum.users.schemas import AuthorOut


class TopicCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    category: str

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        if v not in TOPIC_CATEGORIES:
            raise ValueError("unknown category")
        return v


class TopicOut(CamelModel):
    id: int
    title: str
    content: str
    category: str
    image: str | None = None
    attachment: str | None = None
    attachment_name: str | None = None
    author_id: int
    likes_count: int = 0
    created_at: datetime | None = None
    author: AuthorOut | None = None


class TopicDetailOut(TopicOut):
    comments: list[CommentOut] = []
