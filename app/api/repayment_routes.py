from fastapi import APIRouter, Depends, Query, status
from typing import Dict, Any, Optional

from app.core.dependencies import get_repayment_service, json_object_body
from app.schemas.common_schema import ErrorResponse, ListResponse
from app.services.repayment_service import RepaymentService
from app.helpers.response_builder import build_page_response

router = APIRouter(prefix="/repayments", tags=["Repayments"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_repayment(
    payload: Dict[str, Any] = Depends(json_object_body),
    service: RepaymentService = Depends(get_repayment_service),
):
    return service.create_repayment(payload).to_response()


@router.get("", response_model=ListResponse)
async def list_repayments(
    loan_id: Optional[str] = Query(default=None, alias="loanId"),
    borrower_id: Optional[str] = Query(default=None, alias="borrowerId"),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    page: Optional[str] = Query(default=None),
    page_size: Optional[str] = Query(default=None, alias="pageSize"),
    service: RepaymentService = Depends(get_repayment_service),
):
    repayments = service.list_repayments(loan_id=loan_id, borrower_id=borrower_id, status=status_filter)
    return build_page_response(repayments, page, page_size)


@router.get("/{repayment_id}", responses={404: {"model": ErrorResponse}})
async def get_repayment(repayment_id: str, service: RepaymentService = Depends(get_repayment_service)):
    return service.get_repayment(repayment_id).to_response()
