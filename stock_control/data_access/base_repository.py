# stock_control/data_access/base_repository.py

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar, TYPE_CHECKING
import logging

from stock_control.data_access.data_file_manager import DataFileManager
from stock_control.exceptions import RecordFormatError, StockControlError

if TYPE_CHECKING:
    from stock_control.business_logic.entities.base_entity import BaseEntity

logger = logging.getLogger(__name__)

T = TypeVar('T', bound='BaseEntity')

class BaseRepository(ABC, Generic[T]):
    """Full load / full save of one entity type kept in one delimited data file."""

    # Number of fields of a complete record; records may omit trailing optional fields.
    field_count: int = 0
    required_field_count: Optional[int] = None

    def __init__(self, file_manager: DataFileManager, model_type: Type[T], file_name: str):
        self.file_manager = file_manager
        self.model_type = model_type
        self._file_name = file_name
        logger.debug(f"Repository for {model_type.__name__} initialized on file '{file_name}'.")

    @property
    def file_name(self) -> str:
        return self._file_name

    @abstractmethod
    def _entity_from_row(self, row: List[str]) -> Optional[T]:
        """Builds an entity from the fields of one record. May return None to drop the record."""

    @abstractmethod
    def _entity_to_row(self, entity: T) -> List[Any]:
        """Returns the field values of the record for an entity, in file order."""

    def _format_value(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, Enum):
            return str(value.value)
        if isinstance(value, Decimal):
            return str(value)
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        return str(value)

    def _read_entities(self) -> List[T]:
        entities = []
        required = self.required_field_count or self.field_count
        for line_number, row in self.file_manager.read_records(self._file_name):
            if not (required <= len(row) <= self.field_count):
                message = f"Expected {self.field_count} fields, found {len(row)}"
                logger.error(f"{message} in {self._file_name} line {line_number}: {row}")
                raise RecordFormatError(message, self._file_name, line_number)
            row = row + [""] * (self.field_count - len(row))
            try:
                entity = self._entity_from_row(row)
            except (StockControlError, ValueError, KeyError, ArithmeticError) as e:
                logger.error(f"Invalid record in {self._file_name} line {line_number}: {row} - {e}")
                raise RecordFormatError(f"Invalid record: {e}", self._file_name, line_number) from e
            if entity is not None:
                entities.append(entity)
        return entities

    def save_all(self, entities: Iterable[T]) -> None:
        """Overwrites the data file with the given entities, in order."""
        rows = [[self._format_value(value) for value in self._entity_to_row(entity)] for entity in entities]
        logger.debug(f"Saving {len(rows)} {self.model_type.__name__} records to '{self._file_name}'.")
        self.file_manager.write_records(self._file_name, rows)
