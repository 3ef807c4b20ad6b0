# stock_control/business_logic/__init__.py
from .stock_ledger import StockLedger
from .product_manager import ProductManager
from .movement_manager import MovementManager
