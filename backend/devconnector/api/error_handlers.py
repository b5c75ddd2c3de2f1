"""Error Handlers — global exception handlers for the DevConnector API.

Invariants:
    - DevConnectorError -> its own status and body ({"msg"} or {"errors": [...]})
    - RequestValidationError -> 400 {"errors": [{"msg", "param"}]}, same shape as rule violations
    - Exception (catch-all) -> 500 {"msg": "Server Error"}, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (DevConnectorError), validation (FastAPI), catch-all
    - 4xx domain errors logged at warning, 5xx at error: client mistakes are not incidents
    - Domain errors log their category, severity and ErrorContext as record extras
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from devconnector.core.errors import DevConnectorError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(DevConnectorError)
    async def domain_error_handler(request: Request, exc: DevConnectorError):
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"{exc.code}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
                "user_id": exc.context.user_id,
                "category": exc.category.value,
                "severity": exc.severity.value,
                "resource_id": exc.context.resource_id,
                "debug_info": exc.context.debug_info,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"msg": "Server Error"},
        )


def build_validation_error_response(exc: RequestValidationError) -> dict:
    """Framework validation errors in the rule-violation envelope."""
    return {
        "errors": [
            {
                "msg": e["msg"],
                "param": ".".join(
                    str(loc) for loc in e["loc"] if loc not in ("body", "path", "query")
                ),
            }
            for e in exc.errors()
        ],
    }
