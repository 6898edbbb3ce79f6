from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Optional
import httpx
import logging
import time
import traceback

from app.api.borrower_routes import router as borrower_router
from app.api.loan_routes import router as loan_router
from app.api.reminder_routes import router as reminder_router
from app.api.repayment_routes import router as repayment_router
from app.api.webhook_routes import router as webhook_router
from app.core.config import settings
from app.core.errors import ApiError
from app.core.logging_config import setup_logging
from app.database.memory_store import InMemoryStore
from app.schemas.common_schema import HealthResponse
from app.services.borrower_service import BORROWER_ID_PREFIX, BorrowerService
from app.services.loan_service import LOAN_ID_PREFIX, LoanService
from app.services.reminder_service import REMINDER_ID_PREFIX, ReminderService
from app.services.repayment_service import REPAYMENT_ID_PREFIX, RepaymentService
from app.services.webhook_service import WebhookService
from app.utils.time_utils import utc_now_iso

logger = logging.getLogger("server_exception_handler")

HTTP_ERROR_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, response status and duration for every request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_logger = logging.getLogger("request_logger")
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        request_logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
        )
        return response


async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Framework errors (unknown route, wrong method) use the same envelope
    body = {
        "error": {
            "code": HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            "message": str(exc.detail) if exc.detail else str(exc.status_code),
        }
    }
    logger.warning(f"HTTPException handled: {exc.status_code} {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Only the body is validated by the framework: it must be a JSON object
    body = {
        "error": {
            "code": "INVALID_INPUT",
            "message": "Request body must be a JSON object",
        }
    }
    logger.warning(f"Validation error: {exc.errors()}")
    return JSONResponse(status_code=400, content=body)


async def generic_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exc()
    logger.error(f"Unhandled exception: {str(exc)}\n{tb}")
    body = {
        "error": {
            "code": "INTERNAL_SERVER_ERROR",
            "message": "An unexpected error occurred",
        }
    }
    return JSONResponse(status_code=500, content=body)


def create_app(webhook_transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """Build the API with fresh, empty in-memory stores."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Borrowers, loans, repayments and payment reminders with a webhook simulator",
        version="1.0.0",
    )

    app.state.borrower_service = BorrowerService(InMemoryStore(BORROWER_ID_PREFIX, "borrower"))
    app.state.loan_service = LoanService(InMemoryStore(LOAN_ID_PREFIX, "loan"))
    app.state.reminder_service = ReminderService(InMemoryStore(REMINDER_ID_PREFIX, "reminder"))
    app.state.repayment_service = RepaymentService(InMemoryStore(REPAYMENT_ID_PREFIX, "repayment"))
    app.state.webhook_service = WebhookService(
        timeout=settings.WEBHOOK_TIMEOUT_SECONDS,
        transport=webhook_transport,
    )

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.add_middleware(RequestLoggingMiddleware)
    # Added last so it runs first and answers preflight requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return {
            "status": "ok",
            "service": settings.PROJECT_NAME,
            "timestamp": utc_now_iso(),
        }

    app.include_router(borrower_router)
    app.include_router(loan_router)
    app.include_router(reminder_router)
    app.include_router(repayment_router)
    app.include_router(webhook_router)

    return app


setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
app = create_app()

if __name__ == "__main__":
    import uvicorn

    logging.getLogger(__name__).info(f"{settings.PROJECT_NAME} running on http://localhost:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
