from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WebhookEventTypeEnum(str, Enum):
    reminder_sent = "reminder.sent"
    reminder_failed = "reminder.failed"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReminderSnapshot(_CamelModel):
    id: str
    loan_id: str
    type: str
    trigger_type: str
    days_offset: int
    channel_fallback: List[str]
    status: str
    created_at: str
    last_sent_at: Optional[str]


class DeliverySnapshot(_CamelModel):
    channel: str
    status: str
    attempts: int
    last_attempt_at: str
    failure_reason: Optional[str]


class WebhookEventData(_CamelModel):
    reminder: ReminderSnapshot
    delivery: DeliverySnapshot


class WebhookEvent(_CamelModel):
    """Envelope POSTed to webhook subscribers."""

    id: str
    type: WebhookEventTypeEnum
    created_at: str
    data: WebhookEventData

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class QueuedResponse(BaseModel):
    status: str = Field("queued", description="The webhook request was sent")
