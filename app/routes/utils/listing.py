# app/routes/utils/listing.py
from dataclasses import replace
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Query, status
from pydantic.alias_generators import to_snake
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.services.query import ASC, ListQuery, SortConfig
from app.store import DocumentStore


def get_store(db: Session = Depends(get_db)) -> DocumentStore:
    return DocumentStore(db)


def list_query(
    search: Optional[str] = Query(None, max_length=100),
    sort_key: Optional[str] = Query(None, description="Field to sort by, camelCase or snake_case"),
    sort_direction: str = Query(ASC, pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.PAGE_SIZE, ge=1, le=100)
) -> ListQuery:
    sort = SortConfig(to_snake(sort_key), sort_direction) if sort_key else None
    return ListQuery(search=search, sort=sort, page=page, page_size=page_size)


def with_filters(query: ListQuery, **filters: Any) -> ListQuery:
    """Copy of ``query`` with the given equality filters; ``None`` values are dropped."""
    active: Dict[str, Any] = {k: v for k, v in filters.items() if v is not None}
    return replace(query, filters=active)


def not_found(entity: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{entity} not found"
    )
