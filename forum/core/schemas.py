# forum/core/schemas.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Salida en camelCase (likesCount, createdAt...) como espera el front."""

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
