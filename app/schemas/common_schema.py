from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EntityModel(BaseModel):
    """Base for stored entities.

    Required fields (including nullable ones such as lastSentAt) are always
    serialized. Optional fields are serialized only when they were passed at
    construction, so a field explicitly set to None comes out as null while
    an omitted one is left out.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ErrorDetail(BaseModel):
    field: str
    issue: str


class ErrorInfo(BaseModel):
    code: str
    message: str
    details: Optional[List[ErrorDetail]] = None


class ErrorResponse(BaseModel):
    error: ErrorInfo


class ListResponse(BaseModel):
    data: List[Dict[str, Any]] = Field(..., description="Page of entities in insertion order")
    total: int = Field(..., description="Number of matching entities before pagination")


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str
