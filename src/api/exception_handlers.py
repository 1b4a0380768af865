"""Exception handlers for the FastAPI application.

Every error leaves the API in one envelope::

    {"error_code": ..., "message": ..., "details": ..., "errors": [{"msg": ...}]}

Validation failures also carry ``param`` and ``location`` per error item.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()


def _error_body(
    error_code: str,
    message: str,
    details: Any = None,
    errors: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "errors": errors if errors is not None else [{"msg": message}],
    }


def _validation_item(error: dict[str, Any]) -> dict[str, Any]:
    """Flatten one pydantic error into ``{msg, param, location}``."""
    loc = [str(part) for part in error.get("loc", ())]
    location = loc[0] if loc else None
    param = ".".join(loc[1:]) if len(loc) > 1 else None

    # Custom validators raise ValueError; report their own text without
    # pydantic's "Value error, " prefix.
    ctx_error = (error.get("ctx") or {}).get("error")
    msg = str(ctx_error) if isinstance(ctx_error, ValueError) else error["msg"]

    return {"msg": msg, "param": param, "location": location}


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code.value, exc.message, exc.details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette (404 routes, 405, ...)."""
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("HTTP_ERROR", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report request validation failures as 400 with one item per error."""
        items = [_validation_item(error) for error in exc.errors()]
        logger.info("validation_error", errors=[item["msg"] for item in items])
        return JSONResponse(
            status_code=400,
            content=_error_body(
                ErrorCode.VALIDATION_ERROR.value,
                "Request validation failed",
                errors=items,
            ),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Log unexpected exceptions and answer with a generic 500."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                ErrorCode.INTERNAL_ERROR.value,
                "Server Error",
                details={"request_id": request_id},
            ),
        )
