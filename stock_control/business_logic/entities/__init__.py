# stock_control/business_logic/entities/__init__.py
from .base_entity import BaseEntity
from .person_entity import PersonEntity
from .product_entity import ProductEntity
from .inventory_movement_entity import InventoryMovementEntity
__all__ = [
    "BaseEntity", "PersonEntity", "ProductEntity", "InventoryMovementEntity",
]
