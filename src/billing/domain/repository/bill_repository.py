"""Abstract repository for the Bill aggregate (the bill ledger)."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from billing.domain.model.bill import Bill
from billing.domain.repository.observable import ObservableCollection


class BillRepository(ObservableCollection[Bill], ABC):

    def __init__(self) -> None:
        super().__init__()
        self._issue_lock = threading.RLock()

    def issuing(self):
        """Lock held while a number is drawn and its bill added.

        Two commits holding it in turn can never draw the same number.
        """
        return self._issue_lock

    @abstractmethod
    def add(self, bill: Bill) -> str:
        """Persist a new bill, stamping ``id`` and ``created_at``. Returns the id."""

    @abstractmethod
    def get_by_id(self, bill_id: str) -> Bill | None:
        """Return a bill by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Bill]:
        """Return every live bill, highest bill number first."""

    @abstractmethod
    def list_issued_numbers(self) -> list[str]:
        """Return every bill number this ledger has issued, deleted bills included."""

    @abstractmethod
    def delete(self, bill_id: str) -> None:
        """Remove a bill, keeping its number on record.

        Raises EntityNotFoundError if it does not exist.
        """
