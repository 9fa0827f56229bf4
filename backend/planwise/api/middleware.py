"""Middleware for the FastAPI application.

This module contains middleware that process requests and responses, and the
exception handlers that turn service errors into HTTP responses.
"""

import time
import traceback
import uuid
from typing import Union

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from planwise.core.config import settings
from planwise.core.exceptions import PlanwiseException, unpack_validation_error
from planwise.core.logging import logger
from planwise.core.shared_models import FaultCode

# HTTP status returned for each fault code
FAULT_STATUS_CODES = {
    FaultCode.NOT_FOUND: 404,
    FaultCode.BAD_REQUEST: 400,
    FaultCode.UNAUTHORIZED: 401,
    FaultCode.INTERNAL_SERVER_ERROR: 500,
}


async def add_request_id(request: Request, call_next: callable) -> Response:
    """Middleware to generate and add a request ID to the request for tracing.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    request.state.request_id = str(uuid.uuid4())
    return await call_next(request)


async def log_requests(request: Request, call_next: callable) -> Response:
    """Middleware to log incoming requests.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.info(
        f"Handled request {request.method} {request.url} in {duration:.2f} seconds. "
        f"Response code: {response.status_code}"
    )
    return response


async def exception_logging_middleware(request: Request, call_next: callable) -> Response:
    """Middleware to log unhandled exceptions.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    try:
        response = await call_next(request)
        return response
    except Exception as exc:
        logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")

        response_content = {
            "detail": f"Internal Server Error: {exc.__class__.__name__}: {str(exc)}",
            "code": FaultCode.INTERNAL_SERVER_ERROR.value,
        }

        # Include stack trace only in development mode
        if settings.LOCAL_DEVELOPMENT or settings.DEBUG:
            response_content["trace"] = traceback.format_exc()

        return JSONResponse(status_code=500, content=response_content)


# Exception handlers
async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, ValidationError]
) -> JSONResponse:
    """Exception handler for validation errors that occur during request processing.

    Args:
    ----
        request (Request): The incoming request that triggered the exception.
        exc (Union[RequestValidationError, ValidationError]): The exception object that was raised.

    Returns:
    -------
        JSONResponse: A 422 Unprocessable Entity status response. Each error message is a
            dictionary where the key is the location of the validation error in the request,
            and the value is the associated error message.

    Example of JSON output:
        {
            "errors": [
                {"body.price": "Input should be greater than or equal to 0"},
                {"body.name": "Field required"}
            ]
        }

    """
    error_messages = unpack_validation_error(exc)
    logger.error(f"Validation error: {error_messages}")

    return JSONResponse(status_code=422, content=error_messages)


async def planwise_exception_handler(request: Request, exc: PlanwiseException) -> JSONResponse:
    """Generic exception handler for all PlanwiseException types.

    Maps the exception's fault code to an HTTP status code.

    Args:
    ----
        request (Request): The incoming request that triggered the exception.
        exc (PlanwiseException): The exception object that was raised.

    Returns:
    -------
        JSONResponse: HTTP response with the status code and the error details.
    """
    status_code = FAULT_STATUS_CODES.get(exc.code, 500)
    if status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc}")

    return JSONResponse(
        status_code=status_code, content={"detail": str(exc), "code": exc.code.value}
    )
