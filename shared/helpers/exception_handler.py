import logging
import requests
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


class StoreUnavailableError(RuntimeError):
    """A backing store was used before it was connected, or it went away."""


def internal_error(status_code: str) -> JSONResponse:
    wrapped = JsonOutResult(
        data=None,
        status="Failure",
        status_code=status_code,
        message="Internal Server Error"
    ).model_dump()
    return JSONResponse(content=wrapped, status_code=500)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # error_response() already built the envelope
        if isinstance(exc.detail, dict) and "status_code" in exc.detail:
            wrapped = exc.detail
        else:
            wrapped = JsonOutResult(
                data=None,
                status="Failure",
                status_code=str(exc.status_code),
                message=str(exc.detail)
            ).model_dump()
        return JSONResponse(content=wrapped, status_code=exc.status_code,
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = JsonOutResult(
            data=jsonable_encoder(exc.errors()),
            status="Failure",
            status_code=AppStatusCode.INVALID_INPUT,
            message="Invalid request"
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=422)

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
        logger.error(
            f"Store unavailable on {request.method} {request.url.path}: {exc}")
        return internal_error(AppStatusCode.STORE_UNAVAILABLE)

    # outbound calls to another service (stock provisioning)
    @app.exception_handler(requests.RequestException)
    async def upstream_exception_handler(request: Request, exc: requests.RequestException):
        logger.error(
            f"Upstream call failed on {request.method} {request.url.path}: {exc}")
        return internal_error(AppStatusCode.UPSTREAM_SERVICE_FAILED)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            f"Unhandled exception on {request.method} {request.url.path}")
        return internal_error(AppStatusCode.OPERATION_FAILED)
