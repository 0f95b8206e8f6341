# backend/hedgehog_map/api/errors.py
import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hedgehog_map.schemas.hedgehog import violations
from hedgehog_map.services.hedgehogs.repository import DatabaseError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    label = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(ApiError):
    status_code = 400
    label = "Bad Request"


class NotFound(ApiError):
    status_code = 404
    label = "Not Found"


def error_body(label: str, message: str, **extra) -> dict:
    return {"error": label, "message": message, **extra}


async def _api_error(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.label, exc.message))


async def _http_error(request: Request, exc: StarletteHTTPException):
    # ルーティング由来の 404 / 405 なども同じ形で返す
    try:
        label = HTTPStatus(exc.status_code).phrase
    except ValueError:
        label = "Error"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(label, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=error_body("Bad Request", "Invalid hedgehog data", details=violations(exc.errors())),
    )


async def _database_error(request: Request, exc: DatabaseError):
    # 詳細はサーバログのみ。クライアントには汎用メッセージ
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content=error_body("Internal Server Error", "Database error"))


async def _unexpected_error(request: Request, exc: Exception):
    logger.exception("%s %s failed unexpectedly", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body("Internal Server Error", "Unexpected server error"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(DatabaseError, _database_error)
    app.add_exception_handler(Exception, _unexpected_error)
