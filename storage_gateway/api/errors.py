"""
API error handling and exception mapping.

Every failure leaves the API as ``{"error": "<message>"}``. Only session and
credential failures get their own status codes; everything else is a 500.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from storage_gateway.api.schemas import ErrorResponse
from storage_gateway.domain.exceptions import GatewayError
from storage_gateway.infra.config.logging_config import get_logger

logger = get_logger("api.errors")

STATUS_BY_CODE = {
    "MISSING_SESSION": status.HTTP_401_UNAUTHORIZED,
    "INVALID_SESSION": status.HTTP_403_FORBIDDEN,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("request.failed", code=exc.code, error=exc.message)
    else:
        logger.info("request.rejected", code=exc.code, error=exc.message)
    return error_response(status_code, exc.message)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    formatted_errors = []
    for error in exc.errors():
        location = " -> ".join(str(loc) for loc in error["loc"])
        formatted_errors.append(f"{location}: {error['msg']}")

    message = "Validation failed: " + "; ".join(formatted_errors)
    logger.info("request.invalid", error=message)
    return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, message)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.error", error_type=type(exc).__name__, error=str(exc))
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def setup_error_handlers(app) -> None:
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
