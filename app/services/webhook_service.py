"""
Webhook simulator: builds sample reminder delivery events and POSTs them to
a subscriber URL so integrators can test their receiving endpoint.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.core.errors import InvalidInputError, WebhookSendError
from app.schemas.webhook_schema import (
    DeliverySnapshot,
    ReminderSnapshot,
    WebhookEvent,
    WebhookEventData,
    WebhookEventTypeEnum,
)
from app.utils.time_utils import utc_now_iso
from app.utils.validation_utils import is_missing

logger = logging.getLogger(__name__)

SAMPLE_EVENT_ID = "evt_01HFQ3J5V6M9T2"
SAMPLE_FAILURE_REASON = "Provider timeout"
ALLOWED_EVENT_TYPES = [e.value for e in WebhookEventTypeEnum]


def build_reminder_webhook_event(event_type: WebhookEventTypeEnum) -> WebhookEvent:
    """
    Build the sample envelope for a reminder delivery event.

    Args:
        event_type: reminder.sent or reminder.failed

    Returns:
        WebhookEvent: fixed sample reminder and delivery, with statuses,
        lastSentAt and failureReason depending on the event type
    """
    event_type = WebhookEventTypeEnum(event_type)
    sent = event_type == WebhookEventTypeEnum.reminder_sent
    status = "sent" if sent else "failed"

    return WebhookEvent(
        id=SAMPLE_EVENT_ID,
        type=event_type,
        created_at=utc_now_iso(),
        data=WebhookEventData(
            reminder=ReminderSnapshot(
                id="rem_1",
                loan_id="loan_98765",
                type="sms",
                trigger_type="before_due",
                days_offset=3,
                channel_fallback=["email"],
                status=status,
                created_at=utc_now_iso(),
                last_sent_at=utc_now_iso() if sent else None,
            ),
            delivery=DeliverySnapshot(
                channel="sms",
                status=status,
                attempts=1,
                last_attempt_at=utc_now_iso(),
                failure_reason=None if sent else SAMPLE_FAILURE_REASON,
            ),
        ),
    )


class WebhookService:
    """Sends sample webhook events. Nothing is retried or tracked."""

    def __init__(self, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        # Tests inject an httpx.MockTransport here
        self.transport = transport

    def example_event(self, event_type: WebhookEventTypeEnum) -> Dict[str, Any]:
        return build_reminder_webhook_event(event_type).to_payload()

    async def send_test_event(self, payload: Dict[str, Any]) -> Dict[str, str]:
        """
        Validate a test request and POST the matching sample event to targetUrl.

        Args:
            payload: request body with targetUrl and eventType

        Returns:
            dict: {"status": "queued"} once the request went out, whatever the
            remote status code was

        Raises:
            InvalidInputError: targetUrl/eventType missing or eventType unknown
            WebhookSendError: the request could not be sent
        """
        target_url = payload.get("targetUrl")
        event_type = payload.get("eventType")

        if is_missing(target_url) or is_missing(event_type):
            raise InvalidInputError("targetUrl and eventType are required.")

        if not (isinstance(event_type, str) and event_type in ALLOWED_EVENT_TYPES):
            raise InvalidInputError("eventType must be reminder.sent or reminder.failed.")

        event = build_reminder_webhook_event(WebhookEventTypeEnum(event_type))

        logger.info(f"Dispatching {event_type} webhook to {target_url}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    str(target_url),
                    headers={"Content-Type": "application/json"},
                    json=event.to_payload(),
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Webhook delivery to {target_url} failed: {str(e)}")
            raise WebhookSendError(str(e) or "Failed to send webhook.")

        logger.info(f"Webhook {event_type} sent to {target_url}, remote responded HTTP {response.status_code}")
        return {"status": "queued"}
