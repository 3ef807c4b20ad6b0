# stock_control/constants.py

from enum import Enum

# General
DATE_FORMAT = "%d/%m/%Y"
DATETIME_FORMAT = "%d/%m/%Y %H:%M"
RECORD_DELIMITER = ";"

class ProductCategory(Enum):
    HARDWARE = "hardware"
    PERIPHERALS = "peripherals"
    ACCESSORIES = "accessories"
    OTHER = "other"

class PersonType(Enum):
    CLIENT = "client"
    SUPPLIER = "supplier"

class MovementKind(Enum):
    INBOUND = "INBOUND"
    SALE = "SALE"
    INTERNAL_USE = "INTERNAL_USE"
    SUPPLIER_RETURN = "SUPPLIER_RETURN"
    OTHER_OUTBOUND = "OTHER_OUTBOUND"

    @property
    def is_inbound(self) -> bool:
        return self is MovementKind.INBOUND

    @property
    def label(self) -> str:
        return MOVEMENT_KIND_LABELS[self]

    @property
    def party_type(self):
        """Type of person this kind carries as detail, None for free-text kinds."""
        return MOVEMENT_KIND_PARTY.get(self)


MOVEMENT_KIND_LABELS = {
    MovementKind.INBOUND: "Inbound",
    MovementKind.SALE: "Sale",
    MovementKind.INTERNAL_USE: "Internal Use",
    MovementKind.SUPPLIER_RETURN: "Supplier Return",
    MovementKind.OTHER_OUTBOUND: "Other Outbound",
}

MOVEMENT_KIND_PARTY = {
    MovementKind.INBOUND: PersonType.SUPPLIER,
    MovementKind.SALE: PersonType.CLIENT,
    MovementKind.SUPPLIER_RETURN: PersonType.SUPPLIER,
}

OUTBOUND_KINDS = [kind for kind in MovementKind if not kind.is_inbound]

# Names written by the first version of the store's data files.
LEGACY_MOVEMENT_TAGS = {
    "ENTRADA": MovementKind.INBOUND,
    "VENDA": MovementKind.SALE,
    "USO": MovementKind.INTERNAL_USE,
    "DEVOLUCAO": MovementKind.SUPPLIER_RETURN,
    "OUTRA": MovementKind.OTHER_OUTBOUND,
}

LEGACY_CATEGORY_NAMES = {
    "perifericos": ProductCategory.PERIPHERALS,
    "acessorios": ProductCategory.ACCESSORIES,
    "outrosProdutos": ProductCategory.OTHER,
}

class MovementView(Enum):
    ALL = "all"
    INBOUND = "inbound"
    OUTBOUND = "outbound"
    CHRONOLOGICAL = "chronological"
