"""Application service: Delete Bill use case.

Removes the bill from the ledger only. The stock sold on the bill is
not put back: a committed bill is a completed sale.
"""

from __future__ import annotations

import logging

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.repository.bill_repository import BillRepository

logger = logging.getLogger(__name__)


class DeleteBillHandler:

    def __init__(self, bill_repo: BillRepository) -> None:
        self._bill_repo = bill_repo

    def handle(self, bill_id: str) -> str:
        bill = self._bill_repo.get_by_id(bill_id)
        if bill is None:
            raise EntityNotFoundError(f"Bill '{bill_id}' not found")
        self._bill_repo.delete(bill_id)
        logger.info("Deleted bill %s (stock not restored)", bill.bill_number)
        return str(bill.bill_number)
