# stock_control/business_logic/movement_manager.py
from datetime import datetime
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING
import logging

from stock_control.business_logic.entities.inventory_movement_entity import InventoryMovementEntity
from stock_control.business_logic.product_manager import check_text_field, parse_price, parse_quantity
from stock_control.constants import MovementKind, MovementView
from stock_control.exceptions import ProductNotFoundError, ValidationError

if TYPE_CHECKING:
    from stock_control.business_logic.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class MovementManager:
    def __init__(self, ledger: 'StockLedger'):
        if ledger is None:
            raise ValueError("ledger cannot be None")
        self.ledger = ledger

    def _build_movement(self, kind: MovementKind, code: str, quantity: Any, unit_price: Any,
                        movement_date: Optional[datetime], detail: Optional[str]) -> InventoryMovementEntity:
        product = self.ledger.find_by_code(code)
        if product is None:
            logger.warning(f"Cannot record {kind.value}: product '{code}' not found.")
            raise ProductNotFoundError(code)

        price = product.unit_price if unit_price in (None, "") else parse_price(unit_price)
        detail_text = check_text_field(detail, "Detail", required=False)
        return InventoryMovementEntity.from_detail(
            movement_type=kind,
            product_code=product.code,
            quantity=parse_quantity(quantity),
            unit_price=price,
            movement_date=movement_date or datetime.now(),
            detail=detail_text,
        )

    def record_inbound(self,
                       code: str,
                       quantity: Any,
                       unit_price: Any = None,
                       movement_date: Optional[datetime] = None,
                       supplier_name: Optional[str] = None) -> InventoryMovementEntity:
        """Registers a receipt of goods. The unit price defaults to the product's current price."""
        movement = self._build_movement(MovementKind.INBOUND, code, quantity, unit_price, movement_date, supplier_name)
        return self.ledger.register_movement(movement)

    def record_outbound(self,
                        kind: Union[MovementKind, str],
                        code: str,
                        quantity: Any,
                        unit_price: Any = None,
                        movement_date: Optional[datetime] = None,
                        detail: Optional[str] = None) -> InventoryMovementEntity:
        """
        Registers a stock withdrawal of the given kind.

        ``detail`` is the client name for a sale, the supplier name for a
        supplier return, the destination for internal use and the reason for
        any other withdrawal.
        """
        if not isinstance(kind, MovementKind):
            try:
                kind = MovementKind(kind)
            except ValueError:
                raise ValidationError(f"Invalid movement type: {kind}")
        if kind.is_inbound:
            raise ValidationError("Use record_inbound for inbound movements.")
        movement = self._build_movement(kind, code, quantity, unit_price, movement_date, detail)
        return self.ledger.register_movement(movement)

    def list_movements(self, view: Union[MovementView, str] = MovementView.ALL) -> List[InventoryMovementEntity]:
        view = MovementView(view)
        if view == MovementView.INBOUND:
            return self.ledger.list_inbound()
        if view == MovementView.OUTBOUND:
            return self.ledger.list_outbound()
        if view == MovementView.CHRONOLOGICAL:
            return self.ledger.list_chronological()
        return list(self.ledger.movements)

    def balance_summary(self, start: Optional[datetime] = None, end: Optional[datetime] = None) -> Dict[str, Any]:
        summary: Dict[str, Any] = {
            "total_quantity": self.ledger.current_stock_quantity(),
            "total_value": self.ledger.current_stock_value(),
            "period_value": None,
        }
        if start is not None and end is not None:
            summary["period_value"] = self.ledger.value_in_period(start, end)
        elif start is not None or end is not None:
            raise ValidationError("Both period start and end are required.")
        logger.debug(f"Balance summary: {summary}")
        return summary
