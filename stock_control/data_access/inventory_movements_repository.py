# stock_control/data_access/inventory_movements_repository.py

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
import logging

from stock_control.config import MOVEMENTS_FILE_NAME
from stock_control.data_access.base_repository import BaseRepository
from stock_control.data_access.data_file_manager import DataFileManager
from stock_control.business_logic.entities.inventory_movement_entity import InventoryMovementEntity
from stock_control.business_logic.entities.product_entity import ProductEntity
from stock_control.constants import LEGACY_MOVEMENT_TAGS, MovementKind

logger = logging.getLogger(__name__)

def parse_movement_kind(tag: str) -> MovementKind:
    if tag in LEGACY_MOVEMENT_TAGS:
        return LEGACY_MOVEMENT_TAGS[tag]
    return MovementKind(tag)

class InventoryMovementsRepository(BaseRepository[InventoryMovementEntity]):
    """Record: kindTag;unitPrice;isoTimestamp;quantity;productCode;extraDetail"""

    field_count = 6
    required_field_count = 5

    def __init__(self, file_manager: DataFileManager, file_name: str = MOVEMENTS_FILE_NAME):
        super().__init__(file_manager=file_manager,
                         model_type=InventoryMovementEntity,
                         file_name=file_name)
        self._known_codes: Dict[str, ProductEntity] = {}

    def _entity_from_row(self, row: List[str]) -> Optional[InventoryMovementEntity]:
        tag, unit_price, timestamp, quantity, product_code, extra = row
        movement_type = parse_movement_kind(tag.strip())
        if product_code not in self._known_codes:
            logger.warning(f"Dropping {movement_type.value} movement of {timestamp}: unknown product code '{product_code}'.")
            return None
        return InventoryMovementEntity.from_detail(
            movement_type=movement_type,
            product_code=product_code,
            quantity=quantity.strip(),
            unit_price=unit_price.strip(),
            movement_date=datetime.fromisoformat(timestamp.strip()),
            detail=extra,
        )

    def _entity_to_row(self, entity: InventoryMovementEntity) -> List[Any]:
        return [
            entity.movement_type,
            entity.unit_price,
            entity.movement_date,
            entity.quantity,
            entity.product_code,
            entity.extra_detail,
        ]

    def load_all(self, known_products: Iterable[ProductEntity]) -> List[InventoryMovementEntity]:
        """Loads every movement whose product code matches one of the known products."""
        self._known_codes = {}
        for product in known_products:
            self._known_codes.setdefault(product.code, product)
        try:
            movements = self._read_entities()
        finally:
            self._known_codes = {}
        logger.info(f"Loaded {len(movements)} movements from '{self._file_name}'.")
        return movements

