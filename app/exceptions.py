# app/exceptions.py
from fastapi import Request, status
from fastapi.responses import JSONResponse


class ClinicError(Exception):
    """Base class for errors raised by the data access layer."""


class NotFound(ClinicError):
    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"{collection}/{doc_id} not found")


class StoreError(ClinicError):
    """Network, timeout or permission failure from the underlying store."""


def _error_body(code: str, message: str) -> dict:
    return {"ok": False, "error": {"code": code, "message": message}}


async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=_error_body("not_found", str(exc)))


async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=_error_body("store_error", str(exc)))


def register_exception_handlers(app):
    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(StoreError, store_error_handler)
