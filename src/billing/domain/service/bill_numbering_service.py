"""Domain service: Bill Numbering.

The next number is one past the highest number the ledger has ever
issued. Deleted bills keep their number on record, so a number is never
handed out twice, even when the newest bill is the one deleted. A full
ledger scan is fine at the volume a single shop produces.
"""

from __future__ import annotations

import logging

from billing.domain.model.bill import DEFAULT_PREFIX, DEFAULT_WIDTH, BillNumber
from billing.domain.repository.bill_repository import BillRepository

logger = logging.getLogger(__name__)


class BillNumberingService:

    def __init__(
        self,
        bill_repo: BillRepository,
        prefix: str = DEFAULT_PREFIX,
        width: int = DEFAULT_WIDTH,
    ) -> None:
        self._bill_repo = bill_repo
        self._prefix = prefix
        self._width = width

    def next_number(self) -> BillNumber:
        """Scan the ledger and return the next bill number.

        Numbers with another prefix or a malformed suffix are ignored.
        Store failures propagate unchanged so the commit aborts before any
        write.
        """
        highest = 0
        numbers = self._bill_repo.list_issued_numbers()
        for text in numbers:
            value = BillNumber.parse_value(text, self._prefix)
            if value is not None and value > highest:
                highest = value
        logger.debug("Scanned %d bill numbers, highest %d", len(numbers), highest)
        return BillNumber(highest + 1, self._prefix, self._width)
