import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIException(HTTPException):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str = None, status_code: int = None):
        super().__init__(
            status_code=status_code or self.status_code,
            detail=detail or self.default_detail,
        )


class ValidationError(APIException):
    status_code = 400
    default_detail = "Invalid request"


class DuplicateError(APIException):
    status_code = 400
    default_detail = "Record already exists"


class UserCodeTakenError(DuplicateError):
    default_detail = "Patient code already taken"


class InvalidCredentialsError(APIException):
    status_code = 400
    default_detail = "Invalid credentials"


class AuthenticationRequiredError(APIException):
    status_code = 401
    default_detail = "Access denied"


class InvalidTokenError(APIException):
    status_code = 403
    default_detail = "Invalid token"


class TokenExpiredError(InvalidTokenError):
    """Expired tokens are rejected exactly like forged ones."""


class NotFoundError(APIException):
    status_code = 404
    default_detail = "Not found"


class ServiceUnavailableError(APIException):
    status_code = 503
    default_detail = "Service unavailable"


def create_error_response(error_message: str, **extra) -> dict:
    """Create a standardized error response"""
    body = {
        "success": False,
        "message": error_message,
    }
    body.update(extra)
    return body


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTPException with the shared error envelope"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 instead of FastAPI's default 422"""
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        errors.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg"))
    logger.info(f"Rejected request to {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content=create_error_response(errors[0] if errors else "Invalid request", errors=errors),
    )
