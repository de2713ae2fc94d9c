"""Application service: Show Bill / List Bills use cases (queries)."""

from __future__ import annotations

from billing.application.dto import BillDTO, to_bill_dto
from billing.domain.exceptions import EntityNotFoundError
from billing.domain.repository.bill_repository import BillRepository


class ShowBillHandler:

    def __init__(self, bill_repo: BillRepository) -> None:
        self._bill_repo = bill_repo

    def handle(self, bill_id: str) -> BillDTO:
        bill = self._bill_repo.get_by_id(bill_id)
        if bill is None:
            raise EntityNotFoundError(f"Bill '{bill_id}' not found")
        return to_bill_dto(bill)


class ListBillsHandler:

    def __init__(self, bill_repo: BillRepository) -> None:
        self._bill_repo = bill_repo

    def handle(self) -> list[BillDTO]:
        return [to_bill_dto(bill) for bill in self._bill_repo.list_all()]
