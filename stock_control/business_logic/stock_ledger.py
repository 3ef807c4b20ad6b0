# stock_control/business_logic/stock_ledger.py
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional, TYPE_CHECKING
import logging

from stock_control.business_logic.entities.inventory_movement_entity import InventoryMovementEntity
from stock_control.business_logic.entities.product_entity import ProductEntity
from stock_control.constants import ProductCategory
from stock_control.exceptions import InsufficientStockError, InvalidMovementError, RecordFormatError

if TYPE_CHECKING:
    from stock_control.data_access.products_repository import ProductsRepository
    from stock_control.data_access.inventory_movements_repository import InventoryMovementsRepository

logger = logging.getLogger(__name__)


class IdSequence:
    """Hands out increasing product ids for one ledger."""

    def __init__(self, start: int = 1):
        self._next = start

    def reset(self, existing_ids: List[int]) -> None:
        self._next = max(existing_ids, default=0) + 1

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value


class StockLedger:
    """
    Owns the product list and the movement history of the store.

    Products and movements are loaded once, the loaded movements are replayed
    in registration order to rebuild current stock, and both data files are
    rewritten in full after every mutation.
    """

    def __init__(self, products_repository: 'ProductsRepository',
                 movements_repository: 'InventoryMovementsRepository'):
        if products_repository is None:
            raise ValueError("products_repository cannot be None")
        if movements_repository is None:
            raise ValueError("movements_repository cannot be None")
        self.products_repo = products_repository
        self.movements_repo = movements_repository

        self.products: List[ProductEntity] = []
        self.movements: List[InventoryMovementEntity] = []
        self.skipped_on_replay: List[InventoryMovementEntity] = []
        self._id_sequence = IdSequence()
        self._load()

    def _load(self) -> None:
        self.products = self.products_repo.load_all()
        self._id_sequence.reset([])
        for product in self.products:
            product.id = self._id_sequence.next_id()

        self.movements = self.movements_repo.load_all(self.products)
        self._replay()
        logger.info(f"Ledger loaded: {len(self.products)} products, {len(self.movements)} movements, "
                    f"{len(self.skipped_on_replay)} skipped on replay.")

    def _replay(self) -> None:
        # Best effort: an outbound that no longer fits the stock is kept in the
        # history but leaves the stock untouched.
        self.skipped_on_replay = []
        for movement in self.movements:
            product = self.find_by_code(movement.product_code)
            try:
                movement.apply_movement(product)
            except InsufficientStockError as e:
                logger.warning(f"Replay skipped movement [{movement}]: {e}")
                self.skipped_on_replay.append(movement)

    # --- Products ---
    def new_product(self, code: str, name: str, unit_price: Any, initial_quantity: Any,
                    category: ProductCategory) -> ProductEntity:
        """Builds a product with a fresh id. The product isn't added to the ledger."""
        product = ProductEntity.create(code, name, unit_price, initial_quantity, category)
        product.id = self._id_sequence.next_id()
        return product

    def add_product(self, product: ProductEntity) -> ProductEntity:
        """Appends a product and rewrites the products file. Code uniqueness is the caller's job."""
        if product.id is None:
            product.id = self._id_sequence.next_id()
        self.products.append(product)
        try:
            self.save_products()
        except (OSError, RecordFormatError):
            logger.error(f"Saving new product '{product.code}' failed. Removing it from the product list.")
            self.products.pop()
            raise
        logger.info(f"Product '{product.code}' ({product.name}, ID: {product.id}) added.")
        return product

    def remove_product(self, product: ProductEntity) -> List[InventoryMovementEntity]:
        """
        Removes a product and every movement of it, then rewrites both data files.
        Returns the removed movements. On a failed save nothing is removed.
        """
        position = next(i for i, p in enumerate(self.products) if p is product)
        previous_movements = self.movements
        removed = [m for m in previous_movements if m.product_code == product.code]

        del self.products[position]
        self.movements = [m for m in previous_movements if m.product_code != product.code]
        try:
            self.movements_repo.save_all(self.movements)
            self.products_repo.save_all(self.products)
        except (OSError, RecordFormatError):
            logger.error(f"Removing product '{product.code}' failed. Restoring it.", exc_info=True)
            self.products.insert(position, product)
            self.movements = previous_movements
            self._restore_movements_file()
            raise
        self.skipped_on_replay = [m for m in self.skipped_on_replay if m.product_code != product.code]
        return removed

    def find_by_code(self, code: str) -> Optional[ProductEntity]:
        for product in self.products:
            if product.code == code:
                return product
        logger.debug(f"No product with code '{code}'.")
        return None

    def save_products(self) -> None:
        self.products_repo.save_all(self.products)

    # --- Movements ---
    def register_movement(self, movement: InventoryMovementEntity) -> InventoryMovementEntity:
        """
        Applies a movement to its product and records it.

        Either the movement is applied and both data files are rewritten, or
        nothing changes: a failed stock check leaves the ledger untouched, and a
        failed save is undone before the error is raised again.
        """
        if not isinstance(movement, InventoryMovementEntity):
            raise InvalidMovementError(f"Not a stock movement: {movement!r}")
        product = self.find_by_code(movement.product_code)
        if product is None:
            raise InvalidMovementError(f"Movement references unknown product code '{movement.product_code}'.")

        quantity_before = product.stock_quantity
        movement.apply_movement(product)
        self.movements.append(movement)
        try:
            self.movements_repo.save_all(self.movements)
            self.products_repo.save_all(self.products)
        except (OSError, RecordFormatError):
            logger.error(f"Persisting movement [{movement}] failed. Rolling back.", exc_info=True)
            self.movements.pop()
            product.stock_quantity = quantity_before
            movement.applied = False
            self._restore_movements_file()
            raise

        logger.info(f"Registered movement [{movement}]. Stock of '{product.code}': "
                    f"{quantity_before} -> {product.stock_quantity}.")
        return movement

    def _restore_movements_file(self) -> None:
        try:
            self.movements_repo.save_all(self.movements)
        except (OSError, RecordFormatError) as e:
            logger.error(f"Could not restore the movements file after a failed save: {e}")

    def list_inbound(self) -> List[InventoryMovementEntity]:
        return [m for m in self.movements if m.is_inbound]

    def list_outbound(self) -> List[InventoryMovementEntity]:
        return [m for m in self.movements if m.is_outbound]

    def list_chronological(self) -> List[InventoryMovementEntity]:
        """All movements by timestamp; movements with equal timestamps keep registration order."""
        return sorted(self.movements, key=lambda m: m.movement_date)

    def movements_for_product(self, code: str) -> List[InventoryMovementEntity]:
        return [m for m in self.movements if m.product_code == code]

    # --- Balance and valuation ---
    def current_stock_quantity(self) -> int:
        return sum(p.stock_quantity for p in self.products)

    def current_stock_value(self) -> Decimal:
        return sum((p.stock_value for p in self.products), Decimal("0"))

    def value_in_period(self, start: datetime, end: datetime) -> Decimal:
        """Net value of the movements dated within [start, end], inbound positive and outbound negative."""
        total = Decimal("0")
        for movement in self.movements:
            if start <= movement.movement_date <= end:
                total += movement.signed_value
        return total
