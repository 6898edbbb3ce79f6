from fastapi import APIRouter, Depends, status
from typing import Dict, Any

from app.core.dependencies import get_loan_service, json_object_body
from app.schemas.common_schema import ErrorResponse, ListResponse
from app.services.loan_service import LoanService
from app.helpers.response_builder import build_list_response

router = APIRouter(prefix="/loans", tags=["Loans"])


# Creates a loan in "pending" status; borrowerId is not checked against /borrowers
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_loan(
    payload: Dict[str, Any] = Depends(json_object_body),
    service: LoanService = Depends(get_loan_service),
):
    return service.create_loan(payload).to_response()


@router.get("", response_model=ListResponse)
async def list_loans(service: LoanService = Depends(get_loan_service)):
    return build_list_response(service.list_loans())


@router.get("/{loan_id}", responses={404: {"model": ErrorResponse}})
async def get_loan(loan_id: str, service: LoanService = Depends(get_loan_service)):
    return service.get_loan(loan_id).to_response()
