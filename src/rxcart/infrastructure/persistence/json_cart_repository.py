"""JSON-document-backed implementation of CartRepository.

Works on the snapshot taken when the unit of work began.  Saved carts
are held as pending records until ``merge_into`` applies them to a
freshly loaded document at commit time.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

from rxcart.domain.exceptions import (
    ConcurrentModificationError,
    StorageError,
    ValidationError,
)
from rxcart.domain.model.cart import Cart, CartLine
from rxcart.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from rxcart.domain.repository.cart_repository import CartRepository


class JsonCartRepository(CartRepository):

    def __init__(self, document: dict[str, list], reserve_id: Callable[[], int]) -> None:
        self._records: dict[int, dict] = {raw["id"]: raw for raw in document["carts"]}
        self._loaded_versions = {cid: raw.get("version", 0) for cid, raw in self._records.items()}
        self._pending: dict[int, dict] = {}
        self._reserve_id = reserve_id

    # --- CartRepository interface ---------------------------------------------

    def next_id(self) -> int:
        return self._reserve_id()

    def get_by_id(self, cart_id: int) -> Cart | None:
        raw = self._pending.get(cart_id) or self._records.get(cart_id)
        return self._to_domain(raw) if raw is not None else None

    def get_by_client_id(self, client_id: int) -> Cart | None:
        for raw in (*self._pending.values(), *self._records.values()):
            if raw["client_id"] == client_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        cart.version += 1
        self._pending[cart.id] = self._to_raw(cart)

    # --- Unit of work hooks ---------------------------------------------------

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def merge_into(self, document: dict[str, list]) -> None:
        """Apply pending carts to *document*, checking nobody changed them.

        Raises ConcurrentModificationError if a cart's persisted version
        moved since it was loaded, or if another cart was created for the
        same client meanwhile.
        """
        current: dict[int, dict] = {raw["id"]: raw for raw in document["carts"]}

        for cart_id, raw in self._pending.items():
            persisted = current.get(cart_id)
            expected = self._loaded_versions.get(cart_id)

            if expected is None:
                if persisted is not None:
                    raise StorageError(f"Cart #{cart_id} already exists")
                if any(other["client_id"] == raw["client_id"] for other in current.values()):
                    raise ConcurrentModificationError(
                        f"A cart for client #{raw['client_id']} was created concurrently"
                    )
            elif persisted is None or persisted["version"] != expected:
                raise ConcurrentModificationError(
                    f"Cart #{cart_id} was modified concurrently; reload and retry"
                )

            current[cart_id] = raw

        document["carts"] = list(current.values())

    def discard_pending(self) -> None:
        self._pending.clear()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "client_id": cart.client_id,
            "establishment_id": cart.establishment_id,
            "total": str(cart.total.amount),
            "currency": cart.total.currency,
            "version": cart.version,
            "lines": [
                {
                    "id": line.id,
                    "catalog_entry_id": line.catalog_entry_id,
                    "quantity": line.quantity.value,
                }
                for line in cart.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        try:
            return Cart(
                id=raw["id"],
                client_id=raw["client_id"],
                lines=[
                    CartLine(
                        id=raw_line["id"],
                        cart_id=raw["id"],
                        catalog_entry_id=raw_line["catalog_entry_id"],
                        quantity=Quantity(raw_line["quantity"]),
                    )
                    for raw_line in raw.get("lines", [])
                ],
                total=Money(Decimal(raw["total"]), raw.get("currency", DEFAULT_CURRENCY)),
                establishment_id=raw.get("establishment_id"),
                version=raw.get("version", 0),
            )
        except (KeyError, TypeError, ValueError, ArithmeticError, ValidationError) as exc:
            raise StorageError(f"Malformed cart record #{raw.get('id')}: {exc!r}") from exc
