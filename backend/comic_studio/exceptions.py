from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from .logger import logger


class StudioBaseException(Exception):
    """Base exception for the comic studio API"""
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(StudioBaseException):
    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message, code, 404)


class PageTemplateNotFoundError(NotFoundError):
    """Raised when a page template id does not exist"""
    def __init__(self, template_id: str):
        super().__init__(f"Page template {template_id} not found", "PAGE_TEMPLATE_NOT_FOUND")


class StyleNotFoundError(NotFoundError):
    """Raised when a comic style id does not exist"""
    def __init__(self, style_id: str):
        super().__init__(f"Style {style_id} not found", "STYLE_NOT_FOUND")


class UnauthorizedError(StudioBaseException):
    """Raised for missing, invalid or expired bearer tokens"""
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, "UNAUTHORIZED", 401)


class BadRequestError(StudioBaseException):
    def __init__(self, message: str, code: str = "BAD_REQUEST"):
        super().__init__(message, code, 400)


class IntegrationNotConfiguredError(BadRequestError):
    """Raised when a third-party integration is disabled or has no credentials"""
    def __init__(self, integration: str):
        super().__init__(f"{integration} integration is not configured.", "INTEGRATION_NOT_CONFIGURED")


class UpstreamServiceError(StudioBaseException):
    """Raised when Gemini or Stripe calls fail"""
    def __init__(self, message: str = "Upstream service call failed"):
        super().__init__(message, "UPSTREAM_ERROR", 502)


class StorageError(StudioBaseException):
    """Raised when object storage operations fail"""
    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message, "STORAGE_ERROR", 502)


async def studio_exception_handler(request: Request, exc: StudioBaseException):
    """Handle custom application exceptions"""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"Application exception: {exc.code} - {exc.message}",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "request_path": request.url.path,
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "status_code": exc.status_code,
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject malformed requests with 400 and echo the schema errors"""
    # loc/msg/type only: raw inputs may be secrets or Infinity/NaN
    details = jsonable_encoder(
        [{"loc": err.get("loc"), "msg": err.get("msg"), "type": err.get("type")} for err in exc.errors()]
    )
    logger.warning(
        "Invalid request",
        extra={
            "request_path": request.url.path,
            "validation_errors": details,
        }
    )
    return JSONResponse(
        status_code=400,
        content={
            "error": "INVALID_REQUEST",
            "message": "Invalid request body",
            "status_code": 400,
            "details": details,
        }
    )


HTTP_ERROR_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


async def http_exception_handler(request: Request, exc: HTTPException):
    """Routing errors (unknown path, wrong method) in the same envelope as app errors"""
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    logger.warning(
        f"HTTP {exc.status_code} on {request.method} {request.url.path}",
        extra={"error_code": code, "request_path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": code, "message": str(exc.detail), "status_code": exc.status_code},
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    # logger.exception keeps the traceback in exc_info
    logger.exception(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        extra={"request_path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_SERVER_ERROR",
            "message": "An internal error occurred.",
            "status_code": 500,
        },
    )
