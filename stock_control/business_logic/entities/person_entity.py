# stock_control/business_logic/entities/person_entity.py
from dataclasses import dataclass, field
from typing import Optional
from .base_entity import BaseEntity
from .product_entity import check_record_text
from stock_control.constants import PersonType
from stock_control.exceptions import ValidationError

@dataclass
class PersonEntity(BaseEntity):
    name: str
    person_type: PersonType # Enum: Client, Supplier
    # Only the name is kept in the data files, so the address takes no part in equality.
    address: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.name:
            raise ValidationError("Person name cannot be empty.")
        if not isinstance(self.person_type, PersonType):
            raise ValidationError(f"Invalid person type: {self.person_type!r}")
        check_record_text(self.name, "Person name")

    @classmethod
    def supplier(cls, name: str, address: Optional[str] = None) -> 'PersonEntity':
        return cls(name=name, person_type=PersonType.SUPPLIER, address=address)

    @classmethod
    def client(cls, name: str, address: Optional[str] = None) -> 'PersonEntity':
        return cls(name=name, person_type=PersonType.CLIENT, address=address)
