from enum import Enum
from typing import List, Optional, Union

from pydantic import Field, JsonValue

from app.schemas.common_schema import EntityModel


class ReminderChannelEnum(str, Enum):
    sms = "sms"
    email = "email"
    whatsapp = "whatsapp"


class ReminderTriggerEnum(str, Enum):
    before_due = "before_due"
    on_due = "on_due"
    after_due = "after_due"


class ReminderStatusEnum(str, Enum):
    scheduled = "scheduled"
    sent = "sent"
    failed = "failed"
    cancelled = "cancelled"


class TemplateTypeEnum(str, Enum):
    pre_due_soft = "pre_due_soft"
    pre_due_strong = "pre_due_strong"
    due_day = "due_day"
    post_due_soft = "post_due_soft"
    post_due_strong = "post_due_strong"


# Triggers that are relative to the due date and therefore need daysOffset
OFFSET_TRIGGERS = (ReminderTriggerEnum.before_due, ReminderTriggerEnum.after_due)


class Reminder(EntityModel):
    id: str = Field(..., description="Identifier, rem_<n>")
    loan_id: JsonValue
    type: ReminderChannelEnum = Field(..., description="Primary delivery channel")
    trigger_type: ReminderTriggerEnum
    days_offset: Optional[Union[int, float]] = Field(None, ge=1, description="Days before/after the due date")
    template_type: Optional[TemplateTypeEnum] = None
    custom_message: Optional[JsonValue] = None
    channel_fallback: Optional[List[ReminderChannelEnum]] = Field(
        None, description="Ordered alternate channels"
    )
    status: ReminderStatusEnum
    last_sent_at: Optional[str]
    created_at: str
