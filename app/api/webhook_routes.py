from fastapi import APIRouter, Depends, status
from typing import Dict, Any

from app.core.dependencies import get_webhook_service, json_object_body
from app.schemas.common_schema import ErrorResponse
from app.schemas.webhook_schema import QueuedResponse, WebhookEventTypeEnum
from app.services.webhook_service import WebhookService

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.get("/examples/reminder.sent")
async def example_reminder_sent(service: WebhookService = Depends(get_webhook_service)):
    return service.example_event(WebhookEventTypeEnum.reminder_sent)


@router.get("/examples/reminder.failed")
async def example_reminder_failed(service: WebhookService = Depends(get_webhook_service)):
    return service.example_event(WebhookEventTypeEnum.reminder_failed)


# Sends a sample event to targetUrl; 202 means the request went out, not that it was accepted
@router.post(
    "/reminders/test",
    response_model=QueuedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def send_test_webhook(
    payload: Dict[str, Any] = Depends(json_object_body),
    service: WebhookService = Depends(get_webhook_service),
):
    return await service.send_test_event(payload)
