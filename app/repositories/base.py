# app/repositories/base.py
import copy
import logging
import uuid
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from app.exceptions import NotFound
from app.schemas.common import CamelModel
from app.store import DocumentStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=CamelModel)


def is_missing(value: Any) -> bool:
    # absent, null and empty-string fields all take the default
    return value is None or (isinstance(value, str) and value == "")


def with_defaults(record: Mapping[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``record`` with every absent field taken from ``defaults``.

    A default may be a callable, in which case it receives the record and
    its return value is used (e.g. tokens derived from the document id).
    """
    data = dict(record)
    for field, default in defaults.items():
        if is_missing(data.get(field)):
            data[field] = default(data) if callable(default) else copy.copy(default)
    return data


def first_present(record: Mapping[str, Any], *fields: str) -> Any:
    for field in fields:
        value = record.get(field)
        if not is_missing(value):
            return value
    return None


def as_list(value: Any) -> List[Any]:
    """Legacy documents store some lists as comma-separated strings."""
    if is_missing(value):
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def canonical(value: Any, upper: bool = False) -> Any:
    """Trim and case-fold a stored enum value ("Male" becomes "male"); non-strings pass through."""
    if not isinstance(value, str):
        return value
    value = value.strip()
    return (value.upper() if upper else value.lower()) or None


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10].upper()}"


def dump_for_create(payload: CamelModel) -> Dict[str, Any]:
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_for_update(payload: CamelModel) -> Dict[str, Any]:
    return payload.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)


class BaseRepository(Generic[M]):
    collection: str
    model: Type[M]
    defaults: Mapping[str, Any] = {}

    def __init__(self, store: DocumentStore):
        self.store = store

    def normalize(self, record: Mapping[str, Any]) -> M:
        return self.model.model_validate(with_defaults(record, self.defaults))

    def placeholder(self, doc_id: str) -> M:
        return self.normalize({"id": doc_id})

    def get_or_none(self, doc_id: str) -> Optional[M]:
        try:
            return self.normalize(self.store.get_by_id(self.collection, doc_id))
        except NotFound:
            return None

    def get(self, doc_id: str) -> M:
        """Fetch by id; a missing document degrades to a placeholder entity."""
        entity = self.get_or_none(doc_id)
        if entity is None:
            logger.warning(f"{self.collection}/{doc_id} not found, using placeholder")
            return self.placeholder(doc_id)
        return entity

    def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[M]:
        return [self.normalize(r) for r in self.store.list_where(self.collection, filters)]

    def _create(self, fields: Mapping[str, Any], doc_id: Optional[str] = None) -> M:
        return self.normalize(self.store.create(self.collection, fields, doc_id))

    def update(self, doc_id: str, fields: Mapping[str, Any]) -> None:
        self.store.update(self.collection, doc_id, fields)

    def delete(self, doc_id: str) -> None:
        self.store.delete(self.collection, doc_id)

