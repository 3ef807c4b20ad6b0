from datetime import datetime
from decimal import Decimal

import pytest

from stock_control.business_logic.entities.inventory_movement_entity import InventoryMovementEntity
from stock_control.business_logic.entities.person_entity import PersonEntity
from stock_control.config import MOVEMENTS_FILE_NAME, PRODUCTS_FILE_NAME
from stock_control.constants import MovementKind, ProductCategory
from stock_control.exceptions import RecordFormatError

WHEN = datetime(2024, 1, 5, 10, 30)


# ---------------------------------------------------------------------------
# Data files
# ---------------------------------------------------------------------------


def test_create_files_makes_empty_files(file_manager, data_dir):
    assert (data_dir / PRODUCTS_FILE_NAME).read_text(encoding="utf-8") == ""
    assert (data_dir / MOVEMENTS_FILE_NAME).read_text(encoding="utf-8") == ""


def test_missing_file_reads_as_empty(file_manager, data_dir):
    (data_dir / PRODUCTS_FILE_NAME).unlink()
    assert file_manager.read_records(PRODUCTS_FILE_NAME) == []


def test_blank_lines_are_skipped(file_manager, write_data_file):
    write_data_file(PRODUCTS_FILE_NAME, ["", "A;b;1;2;other", "   ", "C;d;3;4;other"])

    records = file_manager.read_records(PRODUCTS_FILE_NAME)

    assert [line for line, _ in records] == [2, 4]
    assert records[0][1] == ["A", "b", "1", "2", "other"]


def test_field_with_delimiter_is_not_written(file_manager, write_data_file, read_data_file):
    write_data_file(PRODUCTS_FILE_NAME, ["A;b;1;2;other"])

    with pytest.raises(RecordFormatError):
        file_manager.write_records(PRODUCTS_FILE_NAME, [["A", "bad;name", "1", "2", "other"]])

    assert read_data_file(PRODUCTS_FILE_NAME) == ["A;b;1;2;other"]


def test_failed_write_keeps_previous_content(file_manager, write_data_file, read_data_file, monkeypatch):
    write_data_file(PRODUCTS_FILE_NAME, ["A;b;1;2;other"])

    def _fail(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("stock_control.data_access.data_file_manager.os.replace", _fail)
    with pytest.raises(OSError):
        file_manager.write_records(PRODUCTS_FILE_NAME, [["Z", "z", "9", "9", "other"]])

    assert read_data_file(PRODUCTS_FILE_NAME) == ["A;b;1;2;other"]


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


def test_products_round_trip(products_repo, make_product):
    products = [
        make_product("HD-01", "SSD 1TB", "399.90", 3, ProductCategory.HARDWARE),
        make_product("AC-07", "USB Cable", "15.00", 40, ProductCategory.ACCESSORIES),
        make_product("OT-02", "Gift Card", "0", 0, ProductCategory.OTHER),
    ]

    products_repo.save_all(products)
    loaded = products_repo.load_all()

    assert loaded == products
    assert [p.code for p in loaded] == ["HD-01", "AC-07", "OT-02"]


def test_product_record_layout(products_repo, make_product, read_data_file):
    products_repo.save_all([make_product("HD-01", "SSD", "399.90", 3, ProductCategory.HARDWARE)])
    assert read_data_file(PRODUCTS_FILE_NAME) == ["HD-01;SSD;399.90;3;hardware"]


def test_product_record_keeps_opening_quantity(products_repo, make_product, read_data_file):
    product = make_product("MS1", "Mouse", "10", 2)
    product.increase_stock(5)

    products_repo.save_all([product])

    assert read_data_file(PRODUCTS_FILE_NAME) == ["MS1;Mouse;10;2;peripherals"]


@pytest.mark.parametrize("name, expected", [
    ("perifericos", ProductCategory.PERIPHERALS),
    ("acessorios", ProductCategory.ACCESSORIES),
    ("outrosProdutos", ProductCategory.OTHER),
    ("hardware", ProductCategory.HARDWARE),
    ("HARDWARE", ProductCategory.HARDWARE),
])
def test_legacy_and_current_category_names(products_repo, write_data_file, name, expected):
    write_data_file(PRODUCTS_FILE_NAME, [f"X1;Item;1.00;1;{name}"])
    assert products_repo.load_all()[0].category is expected


@pytest.mark.parametrize("line", [
    "X1;Item;1.00;1",
    "X1;Item;1.00;1;other;extra",
    "X1;Item;abc;1;other",
    "X1;Item;1.00;-1;other",
    "X1;Item;1.00;1;furniture",
])
def test_malformed_product_record(products_repo, write_data_file, line):
    write_data_file(PRODUCTS_FILE_NAME, ["OK;Fine;1;1;other", line])

    with pytest.raises(RecordFormatError) as excinfo:
        products_repo.load_all()

    assert excinfo.value.file_name == PRODUCTS_FILE_NAME
    assert excinfo.value.line_number == 2


# ---------------------------------------------------------------------------
# Movements
# ---------------------------------------------------------------------------


def test_movements_round_trip(movements_repo, make_product):
    known = [make_product("P1"), make_product("P2")]
    movements = [
        InventoryMovementEntity.inbound("P1", 3, "9.90", WHEN, supplier=PersonEntity.supplier("ACME")),
        InventoryMovementEntity.sale("P1", 1, "15.00", datetime(2024, 1, 6, 8, 0), client=PersonEntity.client("Ana")),
        InventoryMovementEntity.internal_use("P2", 2, "4.00", datetime(2024, 1, 7, 12, 0), destination="Workshop"),
        InventoryMovementEntity.supplier_return("P1", 1, "9.90", datetime(2024, 1, 8, 12, 0)),
        InventoryMovementEntity.other_outbound("P2", 1, "4.00", datetime(2024, 1, 9, 12, 0), reason="Broken"),
    ]

    movements_repo.save_all(movements)
    loaded = movements_repo.load_all(known)

    assert loaded == movements
    assert [m.movement_type for m in loaded] == [m.movement_type for m in movements]


def test_movement_record_layout(movements_repo, read_data_file):
    movements_repo.save_all([InventoryMovementEntity.sale("P1", 2, "15.50", WHEN, client=PersonEntity.client("Ana"))])
    assert read_data_file(MOVEMENTS_FILE_NAME) == ["SALE;15.50;2024-01-05T10:30:00;2;P1;Ana"]


def test_legacy_tags_and_missing_detail(movements_repo, write_data_file, make_product):
    write_data_file(MOVEMENTS_FILE_NAME, [
        "ENTRADA;10.0;2024-01-05T10:30;3;P1",
        "VENDA;12.0;2024-01-06T10:30;1;P1;Ana",
        "USO;10.0;2024-01-07T10:30;1;P1;Office",
        "DEVOLUCAO;10.0;2024-01-08T10:30;1;P1;",
        "OUTRA;10.0;2024-01-09T10:30;1;P1;Lost",
    ])

    loaded = movements_repo.load_all([make_product("P1")])

    assert [m.movement_type for m in loaded] == [
        MovementKind.INBOUND,
        MovementKind.SALE,
        MovementKind.INTERNAL_USE,
        MovementKind.SUPPLIER_RETURN,
        MovementKind.OTHER_OUTBOUND,
    ]
    assert loaded[0].supplier is None
    assert loaded[0].movement_date == WHEN
    assert loaded[1].client.name == "Ana"
    assert loaded[2].note == "Office"
    assert loaded[1].unit_price == Decimal("12.0")


def test_legacy_tags_are_rewritten_with_current_names(movements_repo, write_data_file, read_data_file, make_product):
    write_data_file(MOVEMENTS_FILE_NAME, ["ENTRADA;10.0;2024-01-05T10:30;3;P1"])

    movements_repo.save_all(movements_repo.load_all([make_product("P1")]))

    assert read_data_file(MOVEMENTS_FILE_NAME) == ["INBOUND;10.0;2024-01-05T10:30:00;3;P1;"]


def test_movement_of_unknown_product_is_dropped(movements_repo, write_data_file, make_product):
    write_data_file(MOVEMENTS_FILE_NAME, [
        "INBOUND;10;2024-01-05T10:30:00;3;GONE;",
        "INBOUND;10;2024-01-05T11:30:00;2;P1;",
    ])

    loaded = movements_repo.load_all([make_product("P1")])

    assert len(loaded) == 1
    assert loaded[0].quantity == 2


@pytest.mark.parametrize("line", [
    "TRANSFER;10;2024-01-05T10:30:00;3;P1;",
    "INBOUND;10;05/01/2024;3;P1;",
    "INBOUND;10;2024-01-05T10:30:00;zero;P1;",
    "INBOUND;10;2024-01-05T10:30:00;0;P1;",
    "INBOUND;10;2024-01-05T10:30:00",
])
def test_malformed_movement_record(movements_repo, write_data_file, make_product, line):
    write_data_file(MOVEMENTS_FILE_NAME, [line])

    with pytest.raises(RecordFormatError) as excinfo:
        movements_repo.load_all([make_product("P1")])

    assert excinfo.value.line_number == 1
