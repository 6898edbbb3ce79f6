from fastapi import APIRouter, Depends, status
from typing import Dict, Any

from app.core.dependencies import get_borrower_service, json_object_body
from app.schemas.common_schema import ErrorResponse, ListResponse
from app.services.borrower_service import BorrowerService
from app.helpers.response_builder import build_list_response

router = APIRouter(prefix="/borrowers", tags=["Borrowers"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_borrower(
    payload: Dict[str, Any] = Depends(json_object_body),
    service: BorrowerService = Depends(get_borrower_service),
):
    return service.create_borrower(payload).to_response()


# Returns every borrower; this list is not filtered or paginated
@router.get("", response_model=ListResponse)
async def list_borrowers(service: BorrowerService = Depends(get_borrower_service)):
    return build_list_response(service.list_borrowers())


@router.get("/{borrower_id}", responses={404: {"model": ErrorResponse}})
async def get_borrower(borrower_id: str, service: BorrowerService = Depends(get_borrower_service)):
    return service.get_borrower(borrower_id).to_response()
