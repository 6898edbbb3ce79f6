import logging
import math
from typing import Any, Dict, List

from app.core.errors import InvalidInputError, NotFoundError
from app.database.memory_store import InMemoryStore
from app.schemas.loan_schema import DEFAULT_CURRENCY, Loan, LoanStatusEnum
from app.utils.time_utils import utc_now_iso
from app.utils.validation_utils import is_missing, parse_number, to_json_number

logger = logging.getLogger(__name__)

LOAN_ID_PREFIX = "loan_"


class LoanService:

    def __init__(self, store: InMemoryStore[Loan]):
        self.store = store

    def create_loan(self, payload: Dict[str, Any]) -> Loan:
        borrower_id = payload.get("borrowerId")
        principal = payload.get("principal")
        # Default applies only when the key is absent; an explicit null or "" is rejected
        currency = payload.get("currency", DEFAULT_CURRENCY)

        if is_missing(borrower_id) or is_missing(principal) or is_missing(currency):
            raise InvalidInputError("borrowerId, principal and currency are required")

        numeric_principal = parse_number(principal)
        if not math.isfinite(numeric_principal) or numeric_principal <= 0:
            raise InvalidInputError("principal must be a positive number", "principal")

        fields: Dict[str, Any] = {}
        due_date = payload.get("dueDate")
        if not is_missing(due_date):
            fields["due_date"] = due_date

        loan = self.store.add(lambda loan_id: Loan(
            id=loan_id,
            borrower_id=borrower_id,
            principal=to_json_number(numeric_principal),
            currency=currency,
            status=LoanStatusEnum.pending,
            created_at=utc_now_iso(),
            **fields,
        ))
        logger.info(f"Loan created: {loan.id} for borrower {borrower_id}")
        return loan

    def list_loans(self) -> List[Loan]:
        return self.store.all()

    def get_loan(self, loan_id: str) -> Loan:
        loan = self.store.get(loan_id)
        if loan is None:
            raise NotFoundError("Loan not found.")
        return loan
