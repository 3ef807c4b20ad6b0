# stock_control/business_logic/entities/product_entity.py
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union
import logging

from .base_entity import BaseEntity
from stock_control.constants import LEGACY_CATEGORY_NAMES, ProductCategory, RECORD_DELIMITER
from stock_control.exceptions import InsufficientStockError, ValidationError

logger = logging.getLogger(__name__)


def to_decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValidationError(f"{field_name} must be a number, got {value!r}") from e


def to_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    number = to_decimal(value, field_name)
    if number != number.to_integral_value():
        raise ValidationError(f"{field_name} must be an integer, got {value!r}")
    return int(number)


def check_record_text(value: Optional[str], field_name: str) -> None:
    """Text stored in a data file can't hold the record delimiter or a line break."""
    if value and (RECORD_DELIMITER in value or "\n" in value or "\r" in value):
        raise ValidationError(f"{field_name} cannot contain '{RECORD_DELIMITER}' or line breaks: {value!r}")


def parse_category(value: Union[ProductCategory, str]) -> ProductCategory:
    """Accepts a category, its value or name in any case, or a legacy category name."""
    if isinstance(value, ProductCategory):
        return value
    text = str(value).strip()
    if text in LEGACY_CATEGORY_NAMES:
        return LEGACY_CATEGORY_NAMES[text]
    try:
        return ProductCategory(text.lower())
    except ValueError:
        raise ValidationError(f"Invalid category: {value}")


@dataclass
class ProductEntity(BaseEntity):
    code: str
    name: str
    unit_price: Decimal
    stock_quantity: int
    category: ProductCategory

    # Stock before any movement; this is what the products file keeps.
    opening_quantity: int = field(default=0, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.code:
            raise ValidationError("Product code cannot be empty.")
        check_record_text(self.code, "Product code")
        check_record_text(self.name, "Product name")
        if not isinstance(self.category, ProductCategory):
            raise ValidationError(f"Invalid product category: {self.category!r}")
        self.unit_price = to_decimal(self.unit_price, "unit_price")
        self.stock_quantity = to_int(self.stock_quantity, "stock_quantity")
        if self.unit_price < 0:
            raise ValidationError(f"Unit price cannot be negative (product '{self.code}').")
        if self.stock_quantity < 0:
            raise ValidationError(f"Stock quantity cannot be negative (product '{self.code}').")
        self.opening_quantity = self.stock_quantity

    @classmethod
    def create(cls, code: str, name: str, unit_price: Any, initial_quantity: Any,
               category: ProductCategory, product_id: Optional[int] = None) -> 'ProductEntity':
        return cls(code=code, name=name, unit_price=unit_price,
                   stock_quantity=initial_quantity, category=category, id=product_id)

    @property
    def stock_value(self) -> Decimal:
        return self.unit_price * self.stock_quantity

    def increase_stock(self, quantity: int) -> None:
        """Adds quantity to the stock. Zero or negative amounts are ignored."""
        if quantity <= 0:
            logger.debug(f"Ignoring non-positive stock increase of {quantity} for product '{self.code}'.")
            return
        self.stock_quantity += quantity

    def decrease_stock(self, quantity: int) -> None:
        """Removes quantity from the stock, never letting it go below zero."""
        if quantity > self.stock_quantity:
            raise InsufficientStockError(self.code, quantity, self.stock_quantity)
        self.stock_quantity -= quantity

    def __str__(self) -> str:
        return f"{self.code} - {self.name} | Qty: {self.stock_quantity} | {self.unit_price:.2f}"
