"""Shared fixtures: every test gets its own empty data directory."""

from decimal import Decimal

import pytest

from stock_control.business_logic.entities.product_entity import ProductEntity
from stock_control.business_logic.stock_ledger import StockLedger
from stock_control.constants import ProductCategory
from stock_control.data_access.data_file_manager import DataFileManager
from stock_control.data_access.inventory_movements_repository import InventoryMovementsRepository
from stock_control.data_access.products_repository import ProductsRepository


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def file_manager(data_dir):
    manager = DataFileManager(str(data_dir))
    manager.create_files()
    return manager


@pytest.fixture
def products_repo(file_manager):
    return ProductsRepository(file_manager)


@pytest.fixture
def movements_repo(file_manager):
    return InventoryMovementsRepository(file_manager)


@pytest.fixture
def write_data_file(data_dir, file_manager):
    """Write raw lines into a data file, bypassing the repositories."""

    def _write(file_name, lines):
        (data_dir / file_name).write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")

    return _write


@pytest.fixture
def read_data_file(data_dir):
    def _read(file_name):
        return (data_dir / file_name).read_text(encoding="utf-8").splitlines()

    return _read


@pytest.fixture
def open_ledger(products_repo, movements_repo):
    """Build a ledger from whatever is currently in the data directory."""

    def _open():
        return StockLedger(products_repo, movements_repo)

    return _open


@pytest.fixture
def ledger(open_ledger):
    return open_ledger()


@pytest.fixture
def make_product():
    def _make(code="P1", name="Mouse", unit_price="10.00", quantity=0, category=ProductCategory.PERIPHERALS):
        return ProductEntity.create(code, name, Decimal(unit_price), quantity, category)

    return _make


@pytest.fixture
def stocked_ledger(ledger, make_product):
    """Ledger with a keyboard (5 @ 50.00) and a mouse (0 @ 10.00)."""
    ledger.add_product(make_product("KB1", "Keyboard", "50.00", 5, ProductCategory.PERIPHERALS))
    ledger.add_product(make_product("MS1", "Mouse", "10.00", 0, ProductCategory.PERIPHERALS))
    return ledger
