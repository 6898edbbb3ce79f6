from enum import Enum
from typing import Optional, Union

from pydantic import Field, JsonValue

from app.schemas.common_schema import EntityModel

DEFAULT_CURRENCY = "NGN"


class LoanStatusEnum(str, Enum):
    pending = "pending"
    active = "active"
    completed = "completed"
    defaulted = "defaulted"


class Loan(EntityModel):
    id: str = Field(..., description="Identifier, loan_<n>")
    # Not checked against the borrower store
    borrower_id: JsonValue
    principal: Union[int, float] = Field(..., gt=0)
    currency: JsonValue
    status: LoanStatusEnum
    created_at: str
    due_date: Optional[JsonValue] = None
