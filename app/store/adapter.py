# app/store/adapter.py
"""
Document store adapter.

Every collection (patients, appointments, billing, ...) lives in the single
``documents`` table as JSON payloads keyed by ``(collection, id)``. Callers
only ever see plain dicts: the stored fields plus ``id``, ``createdAt`` and
``updatedAt``.
"""
import logging
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import NotFound, StoreError
from app.models.all_models import Document, clinic_now

logger = logging.getLogger(__name__)


class In:
    """Membership predicate for ``list_where``: field value must be one of ``values``."""

    def __init__(self, values: Iterable[Any]):
        self.values = list(values)

    def matches(self, value: Any) -> bool:
        return value in self.values

    def __repr__(self):
        return f"In({self.values!r})"


def _matches(data: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    for field, expected in filters.items():
        value = data.get(field)
        if isinstance(expected, In):
            if not expected.matches(value):
                return False
        elif value != expected:
            return False
    return True


def _sql_criteria(filters: Mapping[str, Any]) -> List[Any]:
    """String predicates the database can narrow on; ``_matches`` stays authoritative."""
    criteria = []
    for field, expected in filters.items():
        column = Document.data[field].as_string()
        if isinstance(expected, In):
            if expected.values and all(isinstance(v, str) for v in expected.values):
                criteria.append(column.in_(expected.values))
        elif isinstance(expected, str):
            criteria.append(column == expected)
    return criteria


def _to_record(doc: Document) -> Dict[str, Any]:
    record = dict(doc.data or {})
    record["id"] = doc.id
    record["createdAt"] = doc.created_at
    record["updatedAt"] = doc.updated_at
    return record


def _strip_reserved(fields: Mapping[str, Any]) -> Dict[str, Any]:
    # id and server timestamps are owned by the store
    return {k: v for k, v in fields.items() if k not in ("id", "createdAt", "updatedAt")}


class DocumentStore:
    def __init__(self, db: Session):
        self.db = db

    def _find(self, collection: str, doc_id: str) -> Optional[Document]:
        return self.db.query(Document).filter(
            Document.collection == collection,
            Document.id == doc_id
        ).first()

    def get_by_id(self, collection: str, doc_id: str) -> Dict[str, Any]:
        try:
            doc = self._find(collection, doc_id)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {collection}/{doc_id}: {str(e)}")
            raise StoreError(f"Failed to fetch {collection}/{doc_id}") from e
        if doc is None:
            raise NotFound(collection, doc_id)
        return _to_record(doc)

    def list_where(self, collection: str, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        filters = filters or {}
        try:
            docs = self.db.query(Document).filter(
                Document.collection == collection,
                *_sql_criteria(filters)
            ).order_by(Document.created_at, Document.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing {collection}: {str(e)}")
            raise StoreError(f"Failed to list {collection}") from e

        return [_to_record(doc) for doc in docs if _matches(doc.data or {}, filters)]

    def create(self, collection: str, fields: Mapping[str, Any], doc_id: Optional[str] = None) -> Dict[str, Any]:
        doc_id = doc_id or uuid.uuid4().hex
        now = clinic_now()
        try:
            doc = self._find(collection, doc_id)
            if doc is None:
                doc = Document(
                    collection=collection,
                    id=doc_id,
                    data=_strip_reserved(fields),
                    created_at=now,
                    updated_at=now
                )
                self.db.add(doc)
            else:
                doc.data = _strip_reserved(fields)
                doc.updated_at = now
            self.db.commit()
            self.db.refresh(doc)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating {collection}/{doc_id}: {str(e)}")
            raise StoreError(f"Failed to create {collection} document") from e

        logger.info(f"Created {collection}/{doc_id}")
        return _to_record(doc)

    def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        try:
            doc = self._find(collection, doc_id)
            if doc is None:
                raise NotFound(collection, doc_id)
            # reassign so the JSON column is flagged dirty
            doc.data = {**(doc.data or {}), **_strip_reserved(fields)}
            doc.updated_at = clinic_now()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating {collection}/{doc_id}: {str(e)}")
            raise StoreError(f"Failed to update {collection}/{doc_id}") from e

        logger.info(f"Updated {collection}/{doc_id}")

    def delete(self, collection: str, doc_id: str) -> None:
        try:
            self.db.query(Document).filter(
                Document.collection == collection,
                Document.id == doc_id
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting {collection}/{doc_id}: {str(e)}")
            raise StoreError(f"Failed to delete {collection}/{doc_id}") from e

        logger.info(f"Deleted {collection}/{doc_id}")
