"""JSON-document-backed implementation of OrderRepository."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from rxcart.domain.exceptions import StorageError, ValidationError
from rxcart.domain.model.order import Order, OrderLine, OrderStatus
from rxcart.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from rxcart.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, document: dict[str, list], reserve_id: Callable[[], int]) -> None:
        self._records: list[dict] = list(document["orders"])
        self._pending: list[dict] = []
        self._reserve_id = reserve_id

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._reserve_id()

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._all_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_by_client(self, client_id: int) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._all_raw()
            if raw["client_id"] == client_id
        ]

    def list_by_establishment(self, establishment_id: int) -> list[Order]:
        orders = [
            self._to_domain(raw)
            for raw in self._all_raw()
            if raw["establishment_id"] == establishment_id
        ]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def add(self, order: Order) -> None:
        if any(raw["id"] == order.id for raw in self._all_raw()):
            raise StorageError(f"Order #{order.id} already exists")
        self._pending.append(self._to_raw(order))

    # --- Unit of work hooks ---------------------------------------------------

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def merge_into(self, document: dict[str, list]) -> None:
        taken = {raw["id"] for raw in document["orders"]}
        for raw in self._pending:
            if raw["id"] in taken:
                raise StorageError(f"Order #{raw['id']} already exists")
        document["orders"] = [*document["orders"], *self._pending]

    def discard_pending(self) -> None:
        self._pending.clear()

    # --- Serialization --------------------------------------------------------

    def _all_raw(self) -> list[dict]:
        return [*self._records, *self._pending]

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "client_id": order.client_id,
            "establishment_id": order.establishment_id,
            "address_id": order.address_id,
            "payment_method_id": order.payment_method_id,
            "status": order.status.value,
            "subtotal": str(order.subtotal.amount),
            "delivery_fee": str(order.delivery_fee.amount),
            "total": str(order.total.amount),
            "currency": order.subtotal.currency,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "lines": [
                {
                    "id": line.id,
                    "catalog_entry_id": line.catalog_entry_id,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.unit_price.amount),
                    "subtotal": str(line.subtotal.amount),
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        try:
            currency = raw.get("currency", DEFAULT_CURRENCY)
            return Order(
                id=raw["id"],
                client_id=raw["client_id"],
                establishment_id=raw["establishment_id"],
                address_id=raw["address_id"],
                payment_method_id=raw["payment_method_id"],
                lines=tuple(
                    OrderLine(
                        id=raw_line["id"],
                        order_id=raw["id"],
                        catalog_entry_id=raw_line["catalog_entry_id"],
                        quantity=Quantity(raw_line["quantity"]),
                        unit_price=Money(Decimal(raw_line["unit_price"]), currency),
                    )
                    for raw_line in raw["lines"]
                ),
                subtotal=Money(Decimal(raw["subtotal"]), currency),
                delivery_fee=Money(Decimal(raw["delivery_fee"]), currency),
                status=OrderStatus(raw["status"]),
                notes=raw.get("notes"),
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
        except (KeyError, TypeError, ValueError, ArithmeticError, ValidationError) as exc:
            raise StorageError(f"Malformed order record #{raw.get('id')}: {exc!r}") from exc
