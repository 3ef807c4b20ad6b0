# stock_control/business_logic/product_manager.py
from typing import Any, List, Optional, Union, TYPE_CHECKING
from decimal import Decimal, InvalidOperation
import logging

from stock_control.business_logic.entities.product_entity import ProductEntity, check_record_text, parse_category
from stock_control.constants import ProductCategory
from stock_control.exceptions import DuplicateCodeError, ProductNotFoundError, ValidationError

if TYPE_CHECKING:
    from stock_control.business_logic.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


def check_text_field(value: Optional[str], field_label: str, required: bool = True) -> str:
    """Strips a user-typed text and rejects what the data files can't hold."""
    text = (value or "").strip()
    if required and not text:
        raise ValidationError(f"{field_label} cannot be empty.")
    check_record_text(text, field_label)
    return text


def parse_price(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            raise ValidationError("Unit price cannot be empty.")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        logger.warning(f"Invalid unit price entered: {value!r}")
        raise ValidationError(f"Invalid unit price: {value}")


def parse_quantity(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        logger.warning(f"Invalid quantity entered: {value!r}")
        raise ValidationError(f"Invalid quantity: {value}")


class ProductManager:
    def __init__(self, ledger: 'StockLedger'):
        if ledger is None:
            raise ValueError("ledger cannot be None")
        self.ledger = ledger

    def get_product_by_code(self, code: str) -> Optional[ProductEntity]:
        logger.debug(f"Fetching product by code: {code}")
        if not code:
            return None
        return self.ledger.find_by_code(code)

    def get_all_products(self, category_filter: Optional[ProductCategory] = None) -> List[ProductEntity]:
        """Products in registration order, optionally only one category."""
        if category_filter is None:
            return list(self.ledger.products)
        return [p for p in self.ledger.products if p.category == category_filter]

    def create_product(self,
                       code: str,
                       name: str,
                       unit_price: Any,
                       stock_quantity: Any,
                       category: Union[ProductCategory, str]) -> ProductEntity:
        code = check_text_field(code, "Product code")
        name = check_text_field(name, "Product name")
        price = parse_price(unit_price)
        quantity = parse_quantity(stock_quantity)
        category_enum = parse_category(category)

        existing = self.ledger.find_by_code(code)
        if existing is not None:
            logger.warning(f"Rejected new product: code '{code}' already used by '{existing.name}' (ID: {existing.id}).")
            raise DuplicateCodeError(code)

        product = self.ledger.new_product(code, name, price, quantity, category_enum)
        return self.ledger.add_product(product)

    def delete_product(self, code: str) -> ProductEntity:
        """
        Removes a product together with its movement history and rewrites both data files,
        so a product created later with the same code starts from a clean history.
        """
        logger.warning(f"Attempting to delete product '{code}'. This is a sensitive operation.")
        product = self.ledger.find_by_code(code)
        if product is None:
            raise ProductNotFoundError(code)
        removed = self.ledger.remove_product(product)
        logger.info(f"Product '{code}' (ID: {product.id}) deleted with {len(removed)} movements.")
        return product
