import logging
import math
from typing import Any, Dict, List, Optional

from app.core.errors import InvalidInputError, NotFoundError
from app.database.memory_store import InMemoryStore
from app.schemas.reminder_schema import (
    OFFSET_TRIGGERS,
    Reminder,
    ReminderChannelEnum,
    ReminderStatusEnum,
    ReminderTriggerEnum,
    TemplateTypeEnum,
)
from app.utils.time_utils import utc_now_iso
from app.utils.validation_utils import is_missing, parse_number, to_json_number

logger = logging.getLogger(__name__)

REMINDER_ID_PREFIX = "rem_"

ALLOWED_CHANNELS = [c.value for c in ReminderChannelEnum]
ALLOWED_TRIGGERS = [t.value for t in ReminderTriggerEnum]
ALLOWED_TEMPLATES = [t.value for t in TemplateTypeEnum]


def _is_one_of(value: Any, allowed: List[str]) -> bool:
    return isinstance(value, str) and value in allowed


class ReminderService:
    """Schedules reminders and simulates sending them."""

    def __init__(self, store: InMemoryStore[Reminder]):
        self.store = store

    def create_reminder(self, payload: Dict[str, Any]) -> Reminder:
        """Validate a reminder request and store it as scheduled.

        Checks run in a fixed order and the first failure is raised as
        InvalidInputError naming the offending field.
        """
        loan_id = payload.get("loanId")
        channel = payload.get("type")
        trigger_type = payload.get("triggerType")

        if is_missing(loan_id):
            raise InvalidInputError("loanId is required", "loanId")

        if not _is_one_of(channel, ALLOWED_CHANNELS):
            raise InvalidInputError(f"type must be one of {', '.join(ALLOWED_CHANNELS)}", "type")

        if not _is_one_of(trigger_type, ALLOWED_TRIGGERS):
            raise InvalidInputError(
                f"triggerType must be one of {', '.join(ALLOWED_TRIGGERS)}", "triggerType"
            )

        fields: Dict[str, Any] = {}

        if trigger_type in OFFSET_TRIGGERS:
            fields["days_offset"] = self._validate_days_offset(payload.get("daysOffset"))
        # on_due: any daysOffset sent is dropped

        if "channelFallback" in payload:
            channel_fallback = payload["channelFallback"]
            self._validate_channel_fallback(channel_fallback)
            if not is_missing(channel_fallback):
                fields["channel_fallback"] = channel_fallback

        template_type = payload.get("templateType")
        if template_type is not None:
            if not _is_one_of(template_type, ALLOWED_TEMPLATES):
                raise InvalidInputError(
                    f"templateType must be one of {', '.join(ALLOWED_TEMPLATES)}", "templateType"
                )
            fields["template_type"] = template_type

        custom_message = payload.get("customMessage")
        if not is_missing(custom_message):
            fields["custom_message"] = custom_message

        reminder = self.store.add(lambda reminder_id: Reminder(
            id=reminder_id,
            loan_id=loan_id,
            type=channel,
            trigger_type=trigger_type,
            status=ReminderStatusEnum.scheduled,
            last_sent_at=None,
            created_at=utc_now_iso(),
            **fields,
        ))
        logger.info(f"Reminder scheduled: {reminder.id} ({channel}, {trigger_type}) for loan {loan_id}")
        return reminder

    @staticmethod
    def _validate_days_offset(days_offset: Any):
        if days_offset is None:
            raise InvalidInputError(
                "daysOffset is required when triggerType is before_due or after_due", "daysOffset"
            )
        parsed = parse_number(days_offset)
        if not math.isfinite(parsed) or parsed < 1:
            raise InvalidInputError("daysOffset must be a number >= 1", "daysOffset")
        return to_json_number(parsed)

    @staticmethod
    def _validate_channel_fallback(channel_fallback: Any) -> None:
        if not isinstance(channel_fallback, list):
            raise InvalidInputError("channelFallback must be an array", "channelFallback")
        for ch in channel_fallback:
            if not _is_one_of(ch, ALLOWED_CHANNELS):
                raise InvalidInputError(
                    f"channelFallback can only contain {', '.join(ALLOWED_CHANNELS)}", "channelFallback"
                )

    def list_reminders(self, loan_id: Optional[str] = None, status: Optional[str] = None) -> List[Reminder]:
        return self.store.filter(loan_id=loan_id, status=status)

    def get_reminder(self, reminder_id: str) -> Reminder:
        reminder = self.store.get(reminder_id)
        if reminder is None:
            raise NotFoundError("Reminder not found.")
        return reminder

    def send_test(self, reminder_id: str) -> Reminder:
        """Mark a reminder as sent without delivering anything.

        Calling it again just refreshes lastSentAt.
        """
        reminder = self.get_reminder(reminder_id)
        reminder.status = ReminderStatusEnum.sent
        reminder.last_sent_at = utc_now_iso()
        logger.info(f"Reminder {reminder.id} test-sent at {reminder.last_sent_at}")
        return reminder
