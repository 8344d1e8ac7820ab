# forum/comments/schemas.py
from datetime import datetime

from pydantic import BaseModel, field_validator

from forum.core.schemas import CamelModel
from forum.users.schemas import AuthorOut


class CommentCreate(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("comment content is required")
        return v


class CommentOut(CamelModel):
    id: int
    content: str
    author_id: int
    topic_id: int
    likes_count: int = 0
    created_at: datetime | None = None
    author: AuthorOut | None = None
