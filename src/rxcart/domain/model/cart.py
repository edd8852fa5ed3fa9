"""Cart aggregate: one per client, holding lines of a single establishment.

The cart owns its lines.  Line mutations enforce the single-establishment
rule and the one-line-per-catalog-entry rule; the derived ``total`` is set
from outside by ``CartPricingService`` because it depends on current
catalog prices, which the aggregate does not know.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rxcart.domain.exceptions import ConflictError
from rxcart.domain.model.catalog import CatalogPrice
from rxcart.domain.model.value_objects import Money, Quantity


@dataclass
class CartLine:
    """A pending purchase intention: a catalog entry and how many of it."""

    id: int
    cart_id: int
    catalog_entry_id: int
    quantity: Quantity


@dataclass
class Cart:
    """Aggregate root for a client's shopping cart.

    Invariants:
    - every line belongs to ``establishment_id``; it is None exactly when
      the cart has no lines
    - at most one line per catalog entry
    - ``version`` only moves forward; repositories bump it on save
    """

    id: int
    client_id: int
    lines: list[CartLine] = field(default_factory=list)
    total: Money = field(default_factory=Money.zero)
    establishment_id: int | None = None
    version: int = 0

    @staticmethod
    def create(cart_id: int, client_id: int) -> Cart:
        """Create a new, empty cart."""
        return Cart(id=cart_id, client_id=client_id)

    # --- Line mutations -------------------------------------------------------

    def add_line(self, price: CatalogPrice, quantity: Quantity) -> CartLine:
        """Add *quantity* of the priced entry, merging into an existing line.

        Raises ConflictError if the entry is sold by another establishment
        than the items already in the cart.
        """
        if (
            self.establishment_id is not None
            and price.establishment_id != self.establishment_id
        ):
            raise ConflictError(
                "Cannot add a cross-establishment item: cart holds items from "
                f"establishment #{self.establishment_id}, catalog entry "
                f"#{price.catalog_entry_id} belongs to establishment "
                f"#{price.establishment_id}"
            )

        line = self.find_line(price.catalog_entry_id)
        if line is not None:
            line.quantity = line.quantity + quantity
        else:
            line = CartLine(
                id=self._next_line_id(),
                cart_id=self.id,
                catalog_entry_id=price.catalog_entry_id,
                quantity=quantity,
            )
            self.lines.append(line)

        self.establishment_id = price.establishment_id
        return line

    def remove_line(self, catalog_entry_id: int) -> int:
        """Remove the line for *catalog_entry_id*; return how many were removed."""
        before = len(self.lines)
        self.lines = [line for line in self.lines if line.catalog_entry_id != catalog_entry_id]
        removed = before - len(self.lines)
        if not self.lines:
            self._reset()
        return removed

    def set_line_quantity(self, catalog_entry_id: int, quantity: Quantity) -> list[CartLine]:
        """Overwrite the quantity of the matching line; return the lines changed."""
        line = self.find_line(catalog_entry_id)
        if line is None:
            return []
        line.quantity = quantity
        return [line]

    def clear(self) -> int:
        """Drop every line and zero the total; return how many lines were dropped."""
        removed = len(self.lines)
        self.lines = []
        self._reset()
        return removed

    def apply_total(self, total: Money) -> None:
        self.total = total

    # --- Queries --------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find_line(self, catalog_entry_id: int) -> CartLine | None:
        for line in self.lines:
            if line.catalog_entry_id == catalog_entry_id:
                return line
        return None

    # --- Internal helpers -----------------------------------------------------

    def _next_line_id(self) -> int:
        return max((line.id for line in self.lines), default=0) + 1

    def _reset(self) -> None:
        self.total = Money.zero(self.total.currency)
        self.establishment_id = None
