# app/store/__init__.py
from app.store.adapter import DocumentStore, In

__all__ = ["DocumentStore", "In"]
