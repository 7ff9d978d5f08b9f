# app/schemas/common.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Generic, List, TypeVar

T = TypeVar("T")

class CamelModel(BaseModel):
    """Base for every entity: attributes are snake_case, stored/JSON names camelCase."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class Page(CamelModel, Generic[T]):
    items: List[T]
    page: int
    page_size: int
    total: int
    total_pages: int
