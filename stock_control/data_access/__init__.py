# stock_control/data_access/__init__.py

from .data_file_manager import DataFileManager
from .base_repository import BaseRepository

from .products_repository import ProductsRepository
from .inventory_movements_repository import InventoryMovementsRepository

