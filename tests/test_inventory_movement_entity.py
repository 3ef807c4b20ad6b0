from datetime import datetime
from decimal import Decimal

import pytest

from stock_control.business_logic.entities.inventory_movement_entity import InventoryMovementEntity
from stock_control.business_logic.entities.person_entity import PersonEntity
from stock_control.constants import MovementKind, PersonType
from stock_control.exceptions import InsufficientStockError, InvalidMovementError, ValidationError

WHEN = datetime(2024, 5, 20, 10, 15)


def test_inbound_increases_stock(make_product):
    product = make_product(quantity=1)
    movement = InventoryMovementEntity.inbound("P1", 4, "9.50", WHEN, supplier=PersonEntity.supplier("ACME"))

    movement.apply_movement(product)

    assert product.stock_quantity == 5
    assert movement.applied
    assert movement.supplier.name == "ACME"
    assert movement.client is None


@pytest.mark.parametrize("factory", [
    InventoryMovementEntity.sale,
    InventoryMovementEntity.internal_use,
    InventoryMovementEntity.supplier_return,
    InventoryMovementEntity.other_outbound,
])
def test_every_outbound_kind_decreases_stock(make_product, factory):
    product = make_product(quantity=5)
    movement = factory("P1", 2, "10", WHEN)

    movement.apply_movement(product)

    assert product.stock_quantity == 3
    assert movement.is_outbound
    assert movement.signed_quantity == -2
    assert movement.signed_value == Decimal("-20")


def test_failed_outbound_stays_unapplied(make_product):
    product = make_product(quantity=1)
    movement = InventoryMovementEntity.sale("P1", 2, "10", WHEN)

    with pytest.raises(InsufficientStockError):
        movement.apply_movement(product)

    assert product.stock_quantity == 1
    assert not movement.applied


def test_movement_cannot_be_applied_twice(make_product):
    product = make_product(quantity=0)
    movement = InventoryMovementEntity.inbound("P1", 1, "10", WHEN)
    movement.apply_movement(product)

    with pytest.raises(InvalidMovementError):
        movement.apply_movement(product)
    assert product.stock_quantity == 1


def test_movement_rejects_other_product(make_product):
    movement = InventoryMovementEntity.inbound("OTHER", 1, "10", WHEN)
    with pytest.raises(InvalidMovementError):
        movement.apply_movement(make_product(code="P1"))


@pytest.mark.parametrize("quantity", [0, -3])
def test_quantity_must_be_positive(quantity):
    with pytest.raises(ValidationError):
        InventoryMovementEntity.inbound("P1", quantity, "10", WHEN)


def test_negative_price_and_bad_date_are_rejected():
    with pytest.raises(ValidationError):
        InventoryMovementEntity.sale("P1", 1, "-1", WHEN)
    with pytest.raises(ValidationError):
        InventoryMovementEntity.sale("P1", 1, "1", "2024-05-20")


def test_detail_must_match_kind():
    with pytest.raises(ValidationError):
        InventoryMovementEntity.supplier_return("P1", 1, "1", WHEN, supplier=PersonEntity.client("Ana"))
    with pytest.raises(ValidationError):
        InventoryMovementEntity(MovementKind.INBOUND, "P1", WHEN, 1, "1", note="free text")
    with pytest.raises(ValidationError):
        InventoryMovementEntity(MovementKind.INTERNAL_USE, "P1", WHEN, 1, "1",
                                counterparty=PersonEntity.supplier("ACME"))


def test_text_that_cannot_be_stored_is_rejected():
    with pytest.raises(ValidationError):
        InventoryMovementEntity.internal_use("P1", 2, "50", WHEN, destination="Office;2nd floor")
    with pytest.raises(ValidationError):
        InventoryMovementEntity.from_detail(MovementKind.OTHER_OUTBOUND, "P1", 1, "1", WHEN, "broken\nbox")
    with pytest.raises(ValidationError):
        InventoryMovementEntity.inbound("P;1", 1, "1", WHEN)
    with pytest.raises(ValidationError):
        PersonEntity.client("Ana;Maria")
    with pytest.raises(ValidationError):
        PersonEntity.supplier("")


@pytest.mark.parametrize("kind, label", [
    (MovementKind.INBOUND, "Inbound"),
    (MovementKind.SALE, "Sale"),
    (MovementKind.INTERNAL_USE, "Internal Use"),
    (MovementKind.SUPPLIER_RETURN, "Supplier Return"),
    (MovementKind.OTHER_OUTBOUND, "Other Outbound"),
])
def test_kind_label(kind, label):
    movement = InventoryMovementEntity.from_detail(kind, "P1", 1, "1", WHEN, None)
    assert movement.kind_label() == label


def test_from_detail_builds_party_or_note():
    sale = InventoryMovementEntity.from_detail(MovementKind.SALE, "P1", 1, "1", WHEN, "Ana")
    use = InventoryMovementEntity.from_detail(MovementKind.INTERNAL_USE, "P1", 1, "1", WHEN, "Workshop")
    other = InventoryMovementEntity.from_detail(MovementKind.OTHER_OUTBOUND, "P1", 1, "1", WHEN, None)

    assert sale.client == PersonEntity(name="Ana", person_type=PersonType.CLIENT)
    assert sale.extra_detail == "Ana"
    assert use.note == "Workshop"
    assert use.extra_detail == "Workshop"
    assert other.note == ""
    assert other.extra_detail == ""


def test_inbound_without_supplier_has_empty_detail():
    movement = InventoryMovementEntity.inbound("P1", 1, "1", WHEN)
    assert movement.counterparty is None
    assert movement.note is None
    assert movement.extra_detail == ""
