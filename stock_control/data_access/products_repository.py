# stock_control/data_access/products_repository.py

from typing import Any, List
import logging

from stock_control.config import PRODUCTS_FILE_NAME
from stock_control.data_access.base_repository import BaseRepository
from stock_control.data_access.data_file_manager import DataFileManager
from stock_control.business_logic.entities.product_entity import ProductEntity, parse_category

logger = logging.getLogger(__name__)

class ProductsRepository(BaseRepository[ProductEntity]):
    """
    Record: code;name;unitPrice;openingQuantity;categoryName

    The stored quantity is the stock before any movement. The ledger replays
    the movements file on top of it to get the current stock.
    """

    field_count = 5

    def __init__(self, file_manager: DataFileManager, file_name: str = PRODUCTS_FILE_NAME):
        super().__init__(file_manager=file_manager,
                         model_type=ProductEntity,
                         file_name=file_name)

    def _entity_from_row(self, row: List[str]) -> ProductEntity:
        code, name, unit_price, quantity, category_name = row
        return ProductEntity(
            code=code,
            name=name,
            unit_price=unit_price.strip(),
            stock_quantity=quantity.strip(),
            category=parse_category(category_name.strip()),
        )

    def _entity_to_row(self, entity: ProductEntity) -> List[Any]:
        return [entity.code, entity.name, entity.unit_price, entity.opening_quantity, entity.category]

    def load_all(self) -> List[ProductEntity]:
        products = self._read_entities()
        logger.info(f"Loaded {len(products)} products from '{self._file_name}'.")
        return products
