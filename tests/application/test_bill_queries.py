"""Tests for the Show/List/Delete bill use cases."""

from datetime import date

import pytest

from billing.application.commit_bill import CommitBillHandler
from billing.application.delete_bill import DeleteBillHandler
from billing.application.show_bill import ListBillsHandler, ShowBillHandler
from billing.domain.exceptions import EntityNotFoundError
from billing.domain.model.cart import Cart
from billing.domain.model.product import Product
from billing.domain.model.value_objects import Money
from tests.fakes import FakeBillRepository, FakeProductRepository


@pytest.fixture
def repos() -> tuple[FakeBillRepository, FakeProductRepository]:
    product_repo = FakeProductRepository(
        [Product(id="1", name="Pipe", price=Money.of("25"), quantity=10)]
    )
    bill_repo = FakeBillRepository()
    handler = CommitBillHandler(bill_repo)
    for name, qty in (("Alice", 2), ("Bob", 3)):
        cart = Cart(product_repo)
        cart.add_catalog_line("1", qty)
        cart.set_customer(name, date(2024, 5, 1))
        handler.handle(cart)
    return bill_repo, product_repo


class TestListAndShow:

    def test_list_newest_first(self, repos):
        bill_repo, _ = repos
        bills = ListBillsHandler(bill_repo).handle()
        assert [b.bill_number for b in bills] == ["MPS/00002", "MPS/00001"]

    def test_show(self, repos):
        bill_repo, _ = repos
        bill_id = ListBillsHandler(bill_repo).handle()[0].id
        dto = ShowBillHandler(bill_repo).handle(bill_id)
        assert dto.customer_name == "Bob"
        assert dto.items[0].line_total == "INR 75.00"
        assert dto.date == "2024-05-01"

    def test_show_missing(self, repos):
        bill_repo, _ = repos
        with pytest.raises(EntityNotFoundError):
            ShowBillHandler(bill_repo).handle("nope")


class TestDelete:

    def test_delete_does_not_restore_stock(self, repos):
        bill_repo, product_repo = repos
        bill_id = ListBillsHandler(bill_repo).handle()[0].id

        number = DeleteBillHandler(bill_repo).handle(bill_id)

        assert number == "MPS/00002"
        assert bill_repo.get_by_id(bill_id) is None
        assert product_repo.get_by_id("1").quantity == 5

    def test_delete_missing(self, repos):
        bill_repo, _ = repos
        with pytest.raises(EntityNotFoundError):
            DeleteBillHandler(bill_repo).handle("nope")
