# forum/users/schemas.py
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from forum.core.schemas import CamelModel


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("username")
    @classmethod
    def _strip_username(cls, v: str) -> str:
        return v.strip()

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.strip().lower()


class UserLogin(BaseModel):
    # str y no EmailStr: un email mal escrito es un login fallido más
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.strip().lower()


class RoleUpdate(BaseModel):
    role: str


class UserOut(CamelModel):
    id: int
    username: str
    email: str
    avatar: str | None = None
    bio: str | None = None
    role: str
    created_at: datetime | None = None


class AuthorOut(CamelModel):
    """Resumen del autor que viaja dentro de temas y comentarios."""
    id: int
    username: str
    role: str
    avatar: str | None = None
