"""
Exception handlers mapping SchoolCMS errors to JSON responses.

Response bodies:
    400  {"message": ..., "errors": [{"field": ..., "message": ...}]}
    401  {"message": "Not authorized..."}
    404  {"message": "<Resource> with ID <id> not found."}
    500  {"message": <generic text>}   (details go to the log, never the client)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from ..errors import FieldError, SchoolCMSError, ValidationError


def error_body(error: SchoolCMSError) -> dict:
    if isinstance(error, ValidationError):
        return {"message": error.message, "errors": [e.to_dict() for e in error.errors]}
    if error.status_code >= 500:
        return {"message": error.public_message}
    return {"message": error.message}


async def schoolcms_error_handler(request: Request, exc: SchoolCMSError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc.message}")
    else:
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Query/path parameter errors use the same 400 body as payload errors."""
    errors = []
    for item in exc.errors():
        loc = [str(part) for part in item.get("loc", ()) if part not in ("query", "path", "body")]
        errors.append(FieldError(field=".".join(loc) or "body", message=item.get("msg", "Invalid value")))
    return JSONResponse(status_code=400, content=error_body(ValidationError(errors)))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": SchoolCMSError.public_message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SchoolCMSError, schoolcms_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


__all__ = ["error_body", "register_exception_handlers"]
