"""Exception handlers: render every failure as ``{success: false, error, details}``."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from figma_extractor import config
from figma_extractor.errors import AppError

logger = logging.getLogger("api.errors")


def error_body(error: str, details=None) -> dict:
    return {"success": False, "error": error, "details": details}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        f"{request.method} {request.url.path}: {type(exc).__name__} "
        f"({exc.status_code}): {exc.message}"
    )
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": ".".join(str(p) for p in err.get("loc", ())[1:]), "message": err.get("msg")}
        for err in exc.errors()
    ]
    logger.warning(f"{request.method} {request.url.path}: invalid request: {details}")
    return JSONResponse(status_code=400, content=error_body("Invalid request", details))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path}: unexpected error")
    details = str(exc) if config.APP_ENV == "development" else "An unexpected error occurred"
    return JSONResponse(status_code=500, content=error_body("Internal server error", details))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
