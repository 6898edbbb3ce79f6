import logging
from typing import Any, Dict, Optional

from fastapi import Body, HTTPException, Request, status

from app.services.borrower_service import BorrowerService
from app.services.loan_service import LoanService
from app.services.reminder_service import ReminderService
from app.services.repayment_service import RepaymentService
from app.services.webhook_service import WebhookService

logger = logging.getLogger(__name__)


# Services are created by the app factory and kept on app.state
def _get_service(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        logger.error(f"{name} is not initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{name} is not initialized",
        )
    return service


def get_borrower_service(request: Request) -> BorrowerService:
    return _get_service(request, "borrower_service")


def get_loan_service(request: Request) -> LoanService:
    return _get_service(request, "loan_service")


def get_reminder_service(request: Request) -> ReminderService:
    return _get_service(request, "reminder_service")


def get_repayment_service(request: Request) -> RepaymentService:
    return _get_service(request, "repayment_service")


def get_webhook_service(request: Request) -> WebhookService:
    return _get_service(request, "webhook_service")


def json_object_body(payload: Optional[Dict[str, Any]] = Body(default=None)) -> Dict[str, Any]:
    """Request body as a dict; a missing or null body is treated as {}."""
    return payload or {}
