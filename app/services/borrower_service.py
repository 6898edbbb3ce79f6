import logging
from typing import Any, Dict, List

from app.core.errors import InvalidInputError, NotFoundError
from app.database.memory_store import InMemoryStore
from app.schemas.borrower_schema import Borrower, BorrowerStatusEnum
from app.utils.time_utils import utc_now_iso
from app.utils.validation_utils import is_missing

logger = logging.getLogger(__name__)

BORROWER_ID_PREFIX = "bor_"


class BorrowerService:

    def __init__(self, store: InMemoryStore[Borrower]):
        self.store = store

    def create_borrower(self, payload: Dict[str, Any]) -> Borrower:
        if is_missing(payload.get("fullName")):
            raise InvalidInputError("fullName is required", "fullName")

        fields: Dict[str, Any] = {"full_name": payload["fullName"]}
        # email/phone are kept whenever the key was sent, null included
        for key in ("email", "phone"):
            if key in payload:
                fields[key] = payload[key]

        borrower = self.store.add(lambda borrower_id: Borrower(
            id=borrower_id,
            status=BorrowerStatusEnum.active,
            created_at=utc_now_iso(),
            **fields,
        ))
        logger.info(f"Borrower created: {borrower.id}")
        return borrower

    def list_borrowers(self) -> List[Borrower]:
        return self.store.all()

    def get_borrower(self, borrower_id: str) -> Borrower:
        borrower = self.store.get(borrower_id)
        if borrower is None:
            raise NotFoundError("Borrower not found.")
        return borrower
