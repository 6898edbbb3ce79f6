from enum import Enum
from typing import Optional, Union

from pydantic import Field, JsonValue

from app.schemas.common_schema import EntityModel


class RepaymentStatusEnum(str, Enum):
    recorded = "recorded"
    # Reserved; nothing transitions a repayment into these yet
    failed = "failed"
    reversed = "reversed"


class RepaymentMethodEnum(str, Enum):
    bank_transfer = "bank_transfer"
    card = "card"
    wallet = "wallet"
    cash = "cash"
    ussd = "ussd"
    direct_debit = "direct_debit"
    other = "other"


class Repayment(EntityModel):
    id: str = Field(..., description="Identifier, rep_<n>")
    loan_id: JsonValue
    borrower_id: JsonValue
    amount: Union[int, float] = Field(..., gt=0)
    currency: JsonValue
    paid_at: JsonValue
    method: Optional[RepaymentMethodEnum] = None
    reference: Optional[JsonValue] = None
    status: RepaymentStatusEnum
    failure_reason: Optional[str]
    created_at: str
