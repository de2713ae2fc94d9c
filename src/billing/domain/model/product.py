"""Product aggregate.

Products live independently of carts and bills. Stock on hand
(``quantity``) is the only field the billing flow ever touches, and it
only changes through ``apply_stock_delta``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from billing.domain.exceptions import InsufficientStockError, ValidationError
from billing.domain.model.value_objects import Money


@dataclass(frozen=True)
class Variation:
    """A size-specific price/stock breakdown shown alongside a product."""

    size: str
    price: Money
    quantity: int

    def __post_init__(self) -> None:
        if not self.size or not self.size.strip():
            raise ValidationError("Variation size is required")
        if self.quantity < 0:
            raise ValidationError("Variation quantity cannot be negative")


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``quantity`` is never negative
    - when variations are present their quantities sum to ``quantity``
      at creation time (later reservations move only ``quantity``)
    """

    id: str
    name: str
    price: Money
    quantity: int = 0
    category: str = ""
    subcategory: str | None = None
    variations: list[Variation] = field(default_factory=list)
    updated_at: datetime | None = None

    @staticmethod
    def create(
        id: str,
        name: str,
        price: Money,
        quantity: int,
        category: str = "",
        subcategory: str | None = None,
        variations: list[Variation] | None = None,
    ) -> Product:
        """Create a new catalog product, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if quantity < 0:
            raise ValidationError("Product quantity cannot be negative")
        variations = list(variations or [])
        if variations and sum(v.quantity for v in variations) != quantity:
            raise ValidationError(
                f"Variation quantities must add up to {quantity}"
            )
        return Product(
            id=id,
            name=name.strip(),
            price=price,
            quantity=quantity,
            category=category.strip(),
            subcategory=subcategory.strip() if subcategory else None,
            variations=variations,
            updated_at=datetime.now(timezone.utc),
        )

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Bills already committed are unaffected: they hold a value copy.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
        self.touch()

    def apply_stock_delta(self, delta: int) -> int:
        """Add *delta* (negative to take stock) and return the new quantity.

        Stores call this inside their own atomic section; it checks before
        it writes, so a failed call leaves ``quantity`` untouched.
        """
        if self.quantity + delta < 0:
            raise InsufficientStockError(self.name, -delta, self.quantity)
        self.quantity += delta
        self.touch()
        return self.quantity

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
