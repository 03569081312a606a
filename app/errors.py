"""
Exception handlers that render every failure as ``{"error": message}``.

Failure kinds that reach the client:

- ``HTTPException`` raised by a router (404 "Post not found").
- ``SQLAlchemyError`` escaping a handler.  ``get_db`` has already rolled
  the session back; the driver's own message is returned with a 500.
- ``OSError`` / ``TimeoutError`` from the driver itself.  asyncpg raises
  these unwrapped when the store is unreachable.
- Anything else, as a last resort, still in the same envelope.

Request bodies FastAPI cannot parse are reported as 422 in the same shape.
"""
import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def store_error_message(exc: Exception) -> str:
    """Return the underlying driver message when there is one."""
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc) or exc.__class__.__name__


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    message = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in errors
    )
    return JSONResponse(status_code=422, content={"error": message})


async def store_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": store_error_message(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)
    # Connection-level failures asyncpg does not route through SQLAlchemy.
    app.add_exception_handler(OSError, store_exception_handler)
    app.add_exception_handler(TimeoutError, store_exception_handler)
    app.add_exception_handler(asyncio.TimeoutError, store_exception_handler)
    # Starlette's ServerErrorMiddleware answers with this, then re-raises.
    app.add_exception_handler(Exception, store_exception_handler)
