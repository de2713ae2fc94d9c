"""Unit tests for the StockReservationService domain service."""

import random

import pytest

from billing.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from billing.domain.model.product import Product
from billing.domain.model.value_objects import Money
from billing.domain.service.stock_reservation_service import (
    StockRelease,
    StockReservationService,
)
from tests.fakes import FakeProductRepository


def _setup(quantity: int = 10) -> tuple[StockReservationService, FakeProductRepository]:
    repo = FakeProductRepository(
        [Product(id="1", name="Pipe", price=Money.of("25"), quantity=quantity)]
    )
    return StockReservationService(repo), repo


class TestReserve:

    def test_reserve_decrements_and_returns_quantity(self):
        svc, repo = _setup()
        assert svc.reserve("1", 4) == 6
        assert repo.get_by_id("1").quantity == 6

    def test_reserve_more_than_available_reports_available(self):
        svc, repo = _setup(3)
        with pytest.raises(InsufficientStockError, match="only 3 available") as info:
            svc.reserve("1", 5)
        assert info.value.available == 3
        assert repo.get_by_id("1").quantity == 3

    def test_reserve_missing_product(self):
        svc, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            svc.reserve("99", 1)

    @pytest.mark.parametrize("amount", [0, -2])
    def test_reserve_non_positive_rejected(self, amount):
        svc, repo = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            svc.reserve("1", amount)
        assert repo.stock_updates == 0

    def test_quantity_never_negative(self):
        svc, repo = _setup(20)
        rng = random.Random(7)
        for _ in range(200):
            amount = rng.randint(1, 8)
            if rng.random() < 0.6:
                try:
                    svc.reserve("1", amount)
                except InsufficientStockError:
                    pass
            else:
                svc.release("1", amount)
            assert repo.get_by_id("1").quantity >= 0


class TestRelease:

    def test_release_increments(self):
        svc, repo = _setup(6)
        outcome = svc.release("1", 4)
        assert outcome == StockRelease("1", 4, new_quantity=10)
        assert outcome.ok

    def test_release_deleted_product_does_not_raise(self):
        svc, repo = _setup()
        repo.delete("1")
        outcome = svc.release("1", 4)
        assert not outcome.ok
        assert "not found" in outcome.error

    def test_release_store_failure_does_not_raise(self):
        svc, repo = _setup()
        repo.fail_stock_updates = True
        outcome = svc.release("1", 4)
        assert not outcome.ok
        assert "offline" in outcome.error

    def test_release_non_positive_rejected(self):
        svc, _ = _setup()
        with pytest.raises(ValidationError):
            svc.release("1", 0)


class TestAdjustReservation:

    def test_growth_reserves_delta(self):
        svc, repo = _setup()
        svc.reserve("1", 2)
        assert svc.adjust_reservation("1", 2, 5) == 5
        assert repo.get_by_id("1").quantity == 5

    def test_shrink_releases_delta(self):
        svc, repo = _setup()
        svc.reserve("1", 5)
        outcome = svc.adjust_reservation("1", 5, 1)
        assert outcome.ok
        assert repo.get_by_id("1").quantity == 9

    def test_no_change_is_noop(self):
        svc, repo = _setup()
        assert svc.adjust_reservation("1", 3, 3) is None
        assert repo.stock_updates == 0

    def test_growth_beyond_stock_rejected(self):
        svc, repo = _setup(4)
        svc.reserve("1", 2)
        with pytest.raises(InsufficientStockError, match="only 2 available"):
            svc.adjust_reservation("1", 2, 5)
        assert repo.get_by_id("1").quantity == 2
