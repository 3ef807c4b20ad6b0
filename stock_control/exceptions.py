# stock_control/exceptions.py
"""
Typed exceptions raised by the stock control core.

    StockControlError (base)
    |
    +-- ValidationError          malformed construction input
    +-- InsufficientStockError   a decrease would take stock below zero
    +-- InvalidMovementError     not a movement, unknown product, applied twice
    +-- DuplicateCodeError       product code already registered
    +-- ProductNotFoundError     no product with the given code
    +-- RecordFormatError        unreadable or unwritable data file record

Every class has a machine-readable ``code`` attribute.
"""

from typing import Optional


class StockControlError(Exception):
    """Base exception for all stock control errors."""

    code: str = "STOCK_CONTROL_ERROR"


class ValidationError(StockControlError, ValueError):
    """Input rejected when building a product or a movement."""

    code: str = "VALIDATION_ERROR"


class InsufficientStockError(StockControlError):
    """Requested decrease is larger than the available stock."""

    code: str = "INSUFFICIENT_STOCK"

    def __init__(self, product_code: str, requested: int, available: int):
        self.product_code = product_code
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product '{product_code}': "
            f"requested {requested}, available {available}"
        )


class InvalidMovementError(StockControlError):
    """A movement can't be applied or registered."""

    code: str = "INVALID_MOVEMENT"


class DuplicateCodeError(StockControlError):
    code: str = "DUPLICATE_CODE"

    def __init__(self, product_code: str):
        self.product_code = product_code
        super().__init__(f"A product with code '{product_code}' is already registered")


class ProductNotFoundError(StockControlError):
    code: str = "PRODUCT_NOT_FOUND"

    def __init__(self, product_code: str):
        self.product_code = product_code
        super().__init__(f"Product not found: {product_code}")


class RecordFormatError(StockControlError):
    """A data file record can't be parsed, or an entity can't be written as one."""

    code: str = "RECORD_FORMAT_ERROR"

    def __init__(self, message: str, file_name: Optional[str] = None, line_number: Optional[int] = None):
        self.file_name = file_name
        self.line_number = line_number
        location = ""
        if file_name:
            location = f" ({file_name}" + (f", line {line_number})" if line_number else ")")
        super().__init__(f"{message}{location}")
