from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

from app.core.config import settings

ALLOW_METHODS = "GET, POST"
ALLOW_HEADERS = "Content-Type"


def cors_headers(origin: str | None = None) -> dict:
    """Fixed CORS headers; the allowed origin follows ``CORS_ALLOW_ORIGINS``."""
    headers = {
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }
    origins = settings.cors_origins
    if "*" in origins:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin in origins:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers


def preflight_ok(origin: str | None = None) -> Response:
    return Response(status_code=204, headers=cors_headers(origin))


class PreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that answers every preflight with 204 No Content."""

    def preflight_response(self, request_headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            # Disallowed method or header: still 204 with the fixed headers
            return preflight_ok(request_headers.get("origin"))
        headers = {
            k: v for k, v in response.headers.items()
            if k not in ("content-length", "content-type")
        }
        return Response(status_code=204, headers=headers)
