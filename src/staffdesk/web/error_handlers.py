import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from staffdesk.errors import (
    AccessDeniedError,
    AuthenticationError,
    NotFoundError,
    UpstreamError,
    UserError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

# Checked in order; the first matching class decides the response
_USER_ERROR_RESPONSES: list[tuple[type[UserError], int, str]] = [
    (AuthenticationError, 401, "authentication_error"),
    (AccessDeniedError, 403, "access_denied"),
    (NotFoundError, 404, "not_found"),
    (ValidationError, 400, "validation_error"),
    # Includes upstream 401s: the records API rejected the token, not this service
    (UpstreamError, 502, "upstream_error"),
]


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(request: Request, exc: Exception) -> Response:
    """Map UserError subclasses to status codes. Unlisted subclasses are plain 400s."""
    status_code, error_type = 400, "bad_request"
    for error_class, code, name in _USER_ERROR_RESPONSES:
        if isinstance(exc, error_class):
            status_code, error_type = code, name
            break

    if isinstance(exc, UpstreamError):
        logger.warning("upstream_error", path=request.url.path, upstream_status=exc.status_code, message=str(exc))
    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", path=request.url.path, error=str(exc))
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
