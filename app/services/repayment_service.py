import logging
import math
from typing import Any, Dict, List, Optional

from app.core.errors import InvalidInputError, NotFoundError
from app.database.memory_store import InMemoryStore
from app.schemas.repayment_schema import Repayment, RepaymentMethodEnum, RepaymentStatusEnum
from app.utils.time_utils import utc_now_iso
from app.utils.validation_utils import is_missing, parse_number, to_json_number

logger = logging.getLogger(__name__)

REPAYMENT_ID_PREFIX = "rep_"

ALLOWED_METHODS = [m.value for m in RepaymentMethodEnum]


class RepaymentService:

    def __init__(self, store: InMemoryStore[Repayment]):
        self.store = store

    # Records a repayment; new repayments are always "recorded"
    def create_repayment(self, payload: Dict[str, Any]) -> Repayment:
        loan_id = payload.get("loanId")
        borrower_id = payload.get("borrowerId")
        currency = payload.get("currency")
        paid_at = payload.get("paidAt")
        method = payload.get("method")

        if is_missing(loan_id):
            raise InvalidInputError("loanId is required", "loanId")
        if is_missing(borrower_id):
            raise InvalidInputError("borrowerId is required", "borrowerId")

        amount = parse_number(payload.get("amount"))
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidInputError("amount must be a number > 0", "amount")

        if is_missing(currency):
            raise InvalidInputError("currency is required", "currency")
        if is_missing(paid_at):
            raise InvalidInputError("paidAt is required", "paidAt")

        if method is not None and not (isinstance(method, str) and method in ALLOWED_METHODS):
            raise InvalidInputError("method is invalid", "method")

        fields: Dict[str, Any] = {}
        if not is_missing(method):
            fields["method"] = method
        if "reference" in payload:
            fields["reference"] = payload["reference"]

        repayment = self.store.add(lambda repayment_id: Repayment(
            id=repayment_id,
            loan_id=loan_id,
            borrower_id=borrower_id,
            amount=to_json_number(amount),
            currency=currency,
            paid_at=paid_at,
            status=RepaymentStatusEnum.recorded,
            failure_reason=None,
            created_at=utc_now_iso(),
            **fields,
        ))
        logger.info(f"Repayment recorded: {repayment.id} of {repayment.amount} {currency} for loan {loan_id}")
        return repayment

    def list_repayments(
        self,
        loan_id: Optional[str] = None,
        borrower_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Repayment]:
        return self.store.filter(loan_id=loan_id, borrower_id=borrower_id, status=status)

    def get_repayment(self, repayment_id: str) -> Repayment:
        repayment = self.store.get(repayment_id)
        if repayment is None:
            raise NotFoundError("Repayment not found.")
        return repayment
