# stock_control/main_app.py
import sys
import logging
import logging.config
from PyQt5.QtWidgets import QApplication, QMainWindow, QTabWidget, QMessageBox
from PyQt5.QtCore import QLocale

# --- Configuration and Constants ---
from stock_control.config import APP_TITLE, DATA_DIR, LOGGING_CONFIG, ensure_directories
from stock_control.exceptions import StockControlError

# --- Data Access Layer (DAL) ---
from stock_control.data_access.data_file_manager import DataFileManager
from stock_control.data_access.products_repository import ProductsRepository
from stock_control.data_access.inventory_movements_repository import InventoryMovementsRepository

# --- Business Logic Layer (BLL) ---
from stock_control.business_logic.stock_ledger import StockLedger
from stock_control.business_logic.product_manager import ProductManager
from stock_control.business_logic.movement_manager import MovementManager

# --- Presentation Layer (UI Tabs) ---
from stock_control.presentation.products_ui import ProductsUI
from stock_control.presentation.movements_ui import MovementsUI
from stock_control.presentation.balance_ui import BalanceUI

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle(APP_TITLE)
        self.setGeometry(100, 100, 1100, 700)

        logger.info(f"Initializing data files in {DATA_DIR}...")
        self.file_manager = DataFileManager(DATA_DIR)
        try:
            self.file_manager.create_files()

            logger.info("Initializing Repositories...")
            self.products_repo = ProductsRepository(self.file_manager)
            self.movements_repo = InventoryMovementsRepository(self.file_manager)

            logger.info("Loading stock ledger...")
            self.ledger = StockLedger(self.products_repo, self.movements_repo)
        except (OSError, StockControlError) as e:
            logger.error(f"FATAL: Could not load the data files: {e}", exc_info=True)
            QMessageBox.critical(self, "Data error", f"Could not open or read the data files: {e}")
            sys.exit(1)

        logger.info("Initializing Managers...")
        self.product_manager = ProductManager(self.ledger)
        self.movement_manager = MovementManager(self.ledger)

        logger.info("Setting up UI...")
        self._setup_ui()
        if self.ledger.skipped_on_replay:
            QMessageBox.warning(self, "Stock history",
                                f"{len(self.ledger.skipped_on_replay)} stored movement(s) could not be applied "
                                "because the stock was insufficient. See the log for details.")
        logger.info("MainWindow initialized and UI setup complete.")

    def _setup_ui(self):
        self.tabs = QTabWidget()

        self.products_tab = ProductsUI(self.product_manager, self)
        self.tabs.addTab(self.products_tab, "Products")

        self.movements_tab = MovementsUI(
            movement_manager=self.movement_manager,
            product_manager=self.product_manager,
            parent=self
        )
        self.tabs.addTab(self.movements_tab, "Movements")

        self.balance_tab = BalanceUI(self.movement_manager, self)
        self.tabs.addTab(self.balance_tab, "Balance")

        self.products_tab.products_changed.connect(self.movements_tab.load_movements_data)
        self.products_tab.products_changed.connect(self.balance_tab.refresh)
        self.tabs.currentChanged.connect(self._on_tab_changed)

        self.setCentralWidget(self.tabs)

    def _on_tab_changed(self, index: int):
        widget = self.tabs.widget(index)
        if widget is self.products_tab:
            self.products_tab.load_products_data()
        elif widget is self.balance_tab:
            self.balance_tab.refresh()


def main():
    ensure_directories()
    logging.config.dictConfig(LOGGING_CONFIG)
    logger.info("Application starting...")
    app = QApplication(sys.argv)
    english_locale = QLocale(QLocale.Language.English, QLocale.Country.UnitedStates)
    QLocale.setDefault(english_locale)

    main_window = MainWindow()
    main_window.show()
    logger.info("Application started successfully. Main window shown.")
    sys.exit(app.exec_())

if __name__ == '__main__':
    main()
