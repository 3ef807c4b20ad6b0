# stock_control/business_logic/entities/inventory_movement_entity.py
from dataclasses import dataclass, field
from typing import Any, Optional
from datetime import datetime
from decimal import Decimal
import logging

from .base_entity import BaseEntity
from .person_entity import PersonEntity
from .product_entity import ProductEntity, check_record_text, to_decimal, to_int
from stock_control.constants import MovementKind, PersonType
from stock_control.exceptions import InvalidMovementError, ValidationError

logger = logging.getLogger(__name__)

@dataclass
class InventoryMovementEntity(BaseEntity):
    movement_type: MovementKind
    product_code: str
    movement_date: datetime
    quantity: int
    unit_price: Decimal

    # Detail: a supplier/client for INBOUND, SALE and SUPPLIER_RETURN,
    # a destination or reason text for INTERNAL_USE and OTHER_OUTBOUND.
    counterparty: Optional[PersonEntity] = field(default=None)
    note: Optional[str] = field(default=None)

    applied: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.movement_type, MovementKind):
            raise ValidationError(f"Invalid movement type: {self.movement_type!r}")
        if not self.product_code:
            raise ValidationError("Movement must reference a product code.")
        check_record_text(self.product_code, "Product code")
        if not isinstance(self.movement_date, datetime):
            raise ValidationError(f"Movement date must be a datetime, got {self.movement_date!r}")
        self.quantity = to_int(self.quantity, "quantity")
        self.unit_price = to_decimal(self.unit_price, "unit_price")
        if self.quantity <= 0:
            raise ValidationError(f"Movement quantity must be positive, got {self.quantity}.")
        if self.unit_price < 0:
            raise ValidationError("Movement unit price cannot be negative.")

        party_type = self.movement_type.party_type
        if party_type is None:
            if self.counterparty is not None:
                raise ValidationError(f"{self.kind_label()} movements don't take a supplier or client.")
            check_record_text(self.note, f"{self.kind_label()} note")
            if self.note is None:
                self.note = ""
        else:
            if self.note:
                raise ValidationError(f"{self.kind_label()} movements don't take a free-text note.")
            self.note = None
            if self.counterparty is not None and self.counterparty.person_type != party_type:
                raise ValidationError(
                    f"{self.kind_label()} movements expect a {party_type.value}, "
                    f"got a {self.counterparty.person_type.value}."
                )

    # --- Factories, one per movement kind ---
    @classmethod
    def inbound(cls, product_code: str, quantity: Any, unit_price: Any, movement_date: datetime,
                supplier: Optional[PersonEntity] = None) -> 'InventoryMovementEntity':
        return cls(MovementKind.INBOUND, product_code, movement_date, quantity, unit_price, counterparty=supplier)

    @classmethod
    def sale(cls, product_code: str, quantity: Any, unit_price: Any, movement_date: datetime,
             client: Optional[PersonEntity] = None) -> 'InventoryMovementEntity':
        return cls(MovementKind.SALE, product_code, movement_date, quantity, unit_price, counterparty=client)

    @classmethod
    def internal_use(cls, product_code: str, quantity: Any, unit_price: Any, movement_date: datetime,
                     destination: str = "") -> 'InventoryMovementEntity':
        return cls(MovementKind.INTERNAL_USE, product_code, movement_date, quantity, unit_price, note=destination)

    @classmethod
    def supplier_return(cls, product_code: str, quantity: Any, unit_price: Any, movement_date: datetime,
                        supplier: Optional[PersonEntity] = None) -> 'InventoryMovementEntity':
        return cls(MovementKind.SUPPLIER_RETURN, product_code, movement_date, quantity, unit_price, counterparty=supplier)

    @classmethod
    def other_outbound(cls, product_code: str, quantity: Any, unit_price: Any, movement_date: datetime,
                       reason: str = "") -> 'InventoryMovementEntity':
        return cls(MovementKind.OTHER_OUTBOUND, product_code, movement_date, quantity, unit_price, note=reason)

    @classmethod
    def from_detail(cls, movement_type: MovementKind, product_code: str, quantity: Any, unit_price: Any,
                    movement_date: datetime, detail: Optional[str]) -> 'InventoryMovementEntity':
        """Builds a movement from the plain-text detail stored in the data files or typed by the user."""
        party_type = movement_type.party_type
        if party_type is None:
            return cls(movement_type, product_code, movement_date, quantity, unit_price, note=detail or "")
        counterparty = PersonEntity(name=detail, person_type=party_type) if detail else None
        return cls(movement_type, product_code, movement_date, quantity, unit_price, counterparty=counterparty)

    # --- Kind-dependent behaviour ---
    @property
    def is_inbound(self) -> bool:
        return self.movement_type.is_inbound

    @property
    def is_outbound(self) -> bool:
        return not self.movement_type.is_inbound

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.is_inbound else -self.quantity

    @property
    def signed_value(self) -> Decimal:
        """Movement value at its own unit price, positive for inbound and negative otherwise."""
        return self.unit_price * self.signed_quantity

    @property
    def supplier(self) -> Optional[PersonEntity]:
        if self.counterparty is not None and self.counterparty.person_type == PersonType.SUPPLIER:
            return self.counterparty
        return None

    @property
    def client(self) -> Optional[PersonEntity]:
        if self.counterparty is not None and self.counterparty.person_type == PersonType.CLIENT:
            return self.counterparty
        return None

    @property
    def extra_detail(self) -> str:
        if self.movement_type.party_type is not None:
            return self.counterparty.name if self.counterparty else ""
        return self.note or ""

    def kind_label(self) -> str:
        return self.movement_type.label

    def apply_movement(self, product: ProductEntity) -> None:
        """
        Applies the stock effect of this movement to its product.
        A movement is applied at most once; if the decrease fails it stays unapplied.
        """
        if self.applied:
            raise InvalidMovementError(f"Movement {self} has already been applied.")
        if product.code != self.product_code:
            raise InvalidMovementError(
                f"Movement for product '{self.product_code}' can't be applied to product '{product.code}'."
            )

        if self.movement_type is MovementKind.INBOUND:
            product.increase_stock(self.quantity)
        elif self.movement_type in (MovementKind.SALE, MovementKind.INTERNAL_USE,
                                    MovementKind.SUPPLIER_RETURN, MovementKind.OTHER_OUTBOUND):
            product.decrease_stock(self.quantity)
        else:
            raise InvalidMovementError(f"Unknown movement type: {self.movement_type!r}")

        self.applied = True
        logger.debug(f"Applied {self.kind_label()} of {self.quantity} to product '{product.code}'. "
                     f"Stock now {product.stock_quantity}.")

    def __str__(self) -> str:
        text = (f"{self.kind_label().upper()} | {self.movement_date.isoformat()} | Product: {self.product_code} "
                f"| Qty: {self.quantity} | Unit price: {self.unit_price:.2f}")
        if self.extra_detail:
            text += f" | {self.extra_detail}"
        return text
