import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Хранилище недоступно или отклонило операцию"""


class DuplicateRecordError(Exception):
    """Запись с таким уникальным ключом уже существует"""


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "Storage is temporarily unavailable, please try again later"},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StorageError, storage_error_handler)
