"""
Consolidated middleware for the NutriPlan API
"""

import time
import logging
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import OperationalError

logger = logging.getLogger("nutriplan.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, Decimal):
        return float(obj)
    elif isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    elif isinstance(obj, Exception):
        return str(obj)
    return obj


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_body(code: str, message: str, details: Optional[Any] = None, **extra) -> dict:
    """Error envelope shared by every handler"""
    error = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {
        "success": False,
        "message": message,
        "error": error,
        **extra,
        "timestamp": _timestamp(),
    }


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            f"request_started id={request_id} method={request.method} url={request.url.path}",
            extra={
                "request_id": request_id,
                "client": request.client.host if request.client else None,
            },
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                f"request_completed id={request_id} method={request.method} "
                f"url={request.url.path} status={response.status_code} "
                f"time={process_time:.4f}s"
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                f"request_failed id={request_id} method={request.method} "
                f"url={request.url.path} error={exc} time={process_time:.4f}s",
                exc_info=True,
            )
            raise


# ============================================================================
# Error Handlers
# ============================================================================


def _field_name(loc) -> str:
    # drop the "body"/"query"/"path" prefix FastAPI adds
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts) or "request"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors as 400 with one entry per field"""
    raw = exc.errors()
    logger.warning(f"validation_error url={request.url.path} errors={len(raw)}")

    errors = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in raw
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=make_serializable(
            error_body("VALIDATION_ERROR", "Validation failed", errors=errors)
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions; unknown routes get a fixed message"""
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Route not found"
    logger.warning(f"http_error status={exc.status_code} url={request.url.path} detail={message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(f"HTTP_{exc.status_code}", str(message)),
        headers=getattr(exc, "headers", None),
    )


async def operational_exception_handler(request: Request, exc: OperationalError):
    """Handle expected service errors with their own status code"""
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(f"operational_error status={exc.http_status} code={exc.code} url={request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.http_status,
        content=make_serializable(error_body(exc.code, exc.message, exc.details)),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"unexpected_error url={request.url.path}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_SERVER_ERROR", "Internal server error"),
    )
