#!/usr/bin/env python3
"""
Service exceptions and the JSON error handlers registered on the app.

Every error body has the same shape:
    {"success": false, "error": <message or details>, "type": <name>}
"""

import logging
from typing import Any

from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = 500


class InvalidMatchRequestException(ServiceException):
    """Raised when a match request is missing its skill or level."""
    status_code = 400


def error_response(status_code: int, error: Any, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "type": error_type}
    )


async def service_exception_handler(request: Request, exc: ServiceException) -> JSONResponse:
    """
    Map a ServiceException to its declared status code.

    Client errors are logged at info; anything else is a server fault.
    """
    if exc.status_code < 500:
        logger.info(f"Rejected request to {request.url.path}: {exc}")
    else:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    return error_response(exc.status_code, str(exc), exc.__class__.__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Invalid payload for {request.url.path}: {len(exc.errors())} error(s)")
    return error_response(422, jsonable_errors(exc), "ValidationError")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error in {request.url.path}")
    return error_response(500, "Internal server error", "InternalError")


def jsonable_errors(exc: RequestValidationError) -> list:
    # Pydantic error contexts may carry exception objects
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
