from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_body(message: str, errors: list[dict[str, str]] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"message": message}
    if errors is not None:
        body["errors"] = errors
    return body


def field_error(field: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail=error_body("Invalid request data", [{"field": field, "message": message}]),
    )


def path_label(name: str) -> str:
    if name.endswith("_id"):
        return f"{name[:-3].replace('_', ' ')} ID"
    return name.replace("_", " ")


def _field_name(loc: tuple[Any, ...]) -> str:
    if loc and loc[0] in {"body", "query", "path", "header"}:
        loc = loc[1:]
    return ".".join(str(part) for part in loc) or "body"


@contextmanager
def handle_failures(message: str) -> Iterator[None]:
    """Turn unexpected failures into a 500 carrying ``message``; the cause is only logged."""
    try:
        yield
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception(message)
        raise HTTPException(status_code=500, detail=message) from exc


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict) and "message" in detail:
        body = detail
    else:
        body = error_body(str(detail))
    return JSONResponse(body, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    raw_errors = exc.errors()
    errors = [{"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "")} for err in raw_errors]

    path_errors = [err for err in raw_errors if tuple(err.get("loc", ()))[:1] == ("path",)]
    if path_errors:
        name = str(path_errors[0]["loc"][-1])
        message = f"Invalid {path_label(name)}"
    else:
        message = "Invalid request data"
    return JSONResponse(error_body(message, errors), status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(error_body("Internal server error"), status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
