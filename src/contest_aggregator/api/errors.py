"""Translation of errors into JSON error responses."""

from litestar import Request, Response
from litestar.exceptions import HTTPException, ValidationException
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_504_GATEWAY_TIMEOUT,
)
from loguru import logger

from contest_aggregator.api.schemas.errors import ErrorResponse
from contest_aggregator.domain.exceptions import (
    AggregatorError,
    MalformedUpstreamError,
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamTimeoutError,
    ValidationError,
)

# Most specific first.
STATUS_CODES: list[tuple[type[AggregatorError], int]] = [
    (ValidationError, HTTP_400_BAD_REQUEST),
    (UpstreamNotFoundError, HTTP_404_NOT_FOUND),
    (UpstreamTimeoutError, HTTP_504_GATEWAY_TIMEOUT),
    (MalformedUpstreamError, HTTP_502_BAD_GATEWAY),
    (UpstreamError, HTTP_502_BAD_GATEWAY),
]


def status_code_for(exc: AggregatorError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return HTTP_500_INTERNAL_SERVER_ERROR


def error_response(error: str, kind: str, status_code: int) -> Response[dict]:
    return Response(
        content=ErrorResponse(error=error, kind=kind).model_dump(),
        status_code=status_code,
    )


def handle_aggregator_error(request: Request, exc: AggregatorError) -> Response[dict]:
    status_code = status_code_for(exc)
    logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.kind}: {exc}")
    return error_response(str(exc), exc.kind, status_code)


def handle_validation_exception(request: Request, exc: ValidationException) -> Response[dict]:
    return error_response(exc.detail, ValidationError.kind, HTTP_400_BAD_REQUEST)


def handle_http_exception(request: Request, exc: HTTPException) -> Response[dict]:
    kind = "NotFound" if exc.status_code == HTTP_404_NOT_FOUND else type(exc).__name__
    return error_response(exc.detail, kind, exc.status_code)


def handle_unexpected_error(request: Request, exc: Exception) -> Response[dict]:
    logger.opt(exception=exc).error(f"Unhandled error for {request.method} {request.url.path}")
    return error_response("internal error", "InternalError", HTTP_500_INTERNAL_SERVER_ERROR)


EXCEPTION_HANDLERS = {
    AggregatorError: handle_aggregator_error,
    ValidationException: handle_validation_exception,
    HTTPException: handle_http_exception,
    Exception: handle_unexpected_error,
}
