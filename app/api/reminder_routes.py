from fastapi import APIRouter, Depends, Query, status
from typing import Dict, Any, Optional

from app.core.dependencies import get_reminder_service, json_object_body
from app.schemas.common_schema import ErrorResponse, ListResponse
from app.services.reminder_service import ReminderService
from app.helpers.response_builder import build_page_response

router = APIRouter(prefix="/reminders", tags=["Reminders"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_reminder(
    payload: Dict[str, Any] = Depends(json_object_body),
    service: ReminderService = Depends(get_reminder_service),
):
    return service.create_reminder(payload).to_response()


# Lists reminders with optional loanId/status filters and page/pageSize pagination
@router.get("", response_model=ListResponse)
async def list_reminders(
    loan_id: Optional[str] = Query(default=None, alias="loanId"),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    page: Optional[str] = Query(default=None, description="Page number, defaults to 1"),
    page_size: Optional[str] = Query(default=None, alias="pageSize", description="Page size, defaults to 20"),
    service: ReminderService = Depends(get_reminder_service),
):
    reminders = service.list_reminders(loan_id=loan_id, status=status_filter)
    return build_page_response(reminders, page, page_size)


@router.get("/{reminder_id}", responses={404: {"model": ErrorResponse}})
async def get_reminder(reminder_id: str, service: ReminderService = Depends(get_reminder_service)):
    return service.get_reminder(reminder_id).to_response()


# Simulates a send: marks the reminder as sent and stamps lastSentAt
@router.post("/{reminder_id}/test", responses={404: {"model": ErrorResponse}})
async def test_send_reminder(reminder_id: str, service: ReminderService = Depends(get_reminder_service)):
    return service.send_test(reminder_id).to_response()
