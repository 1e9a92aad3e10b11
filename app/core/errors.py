from fastapi import Request
from fastapi.responses import JSONResponse


class ServiceError(Exception):
    """Base for errors rendered to callers as `{"error": ...}`."""
    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInput(ServiceError):
    status_code = 400


class UpstreamError(ServiceError):
    status_code = 500


class MalformedUpstreamOutput(ValueError):
    """The model returned text that could not be parsed into the expected shape."""


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    body = {"error": exc.message}
    if exc.details is not None:
        body["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=body)
