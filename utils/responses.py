"""
JSON envelope helpers.

Every API answer is {"success": bool, "data"?: ..., "error"?: str} and
carries the permissive CORS headers the storefront pages rely on.
"""

from typing import Any

from starlette.responses import JSONResponse, Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _headers(extra: dict[str, str] | None) -> dict[str, str]:
    headers = dict(CORS_HEADERS)
    if extra:
        headers.update(extra)
    return headers


def success_response(data: Any, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse({"success": True, "data": data}, status_code=200, headers=_headers(headers))


def error_response(message: str, status_code: int = 400, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code, headers=_headers(headers))


def preflight_response() -> Response:
    return Response(status_code=204, headers=dict(CORS_HEADERS))
