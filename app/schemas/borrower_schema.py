from enum import Enum
from typing import Optional

from pydantic import Field, JsonValue

from app.schemas.common_schema import EntityModel


class BorrowerStatusEnum(str, Enum):
    active = "active"
    inactive = "inactive"


class Borrower(EntityModel):
    id: str = Field(..., description="Identifier, bor_<n>")
    full_name: JsonValue = Field(..., description="Borrower's full name as supplied")
    email: Optional[JsonValue] = None
    phone: Optional[JsonValue] = None
    status: BorrowerStatusEnum
    created_at: str = Field(..., description="ISO-8601 creation time")
