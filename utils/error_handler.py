"""
Error Handler for the HTTP API

Maps exceptions to the JSON error envelope:
- StorefrontException subclasses answer with their own status_code and
  customer-safe message
- Starlette HTTP errors (404 route, 405 method) keep their headers, so a
  405 still carries Allow
- anything else is logged with a stack trace and answered with a generic 500

Usage:
    from utils.error_handler import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from exceptions import RateLimitExceededException, StorefrontException
from middleware.rate_limit import RateLimitResult, rate_limit_headers, retry_after_seconds
from utils.responses import error_response


def exception_headers(exc: StorefrontException) -> dict[str, str]:
    if isinstance(exc, RateLimitExceededException):
        result = RateLimitResult(allowed=False, remaining=0, reset_time=exc.reset_time)
        headers = rate_limit_headers(result)
        headers["Retry-After"] = str(retry_after_seconds(result))
        return headers
    return {}


async def handle_storefront_exception(request: Request, exc: StorefrontException):
    log = logging.error if exc.status_code >= 500 else logging.warning
    log(f"{request.method} {request.url.path} -> {exc.status_code}: {exc!r}")
    return error_response(exc.message, exc.status_code, headers=exception_headers(exc))


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        message = "Method not allowed"
    elif exc.status_code == 404:
        message = "Not found"
    else:
        message = str(exc.detail)
    return error_response(message, exc.status_code, headers=dict(exc.headers or {}))


async def handle_unexpected_exception(request: Request, exc: Exception):
    logging.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response("Internal server error", 500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontException, handle_storefront_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
