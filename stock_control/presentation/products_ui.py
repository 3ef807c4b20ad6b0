# stock_control/presentation/products_ui.py

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QLabel, QTableView, QPushButton,
                             QHBoxLayout, QMessageBox, QDialog, QLineEdit, QComboBox,
                             QFormLayout, QDialogButtonBox, QAbstractItemView,
                             QDoubleSpinBox, QSpinBox, QHeaderView)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex, pyqtSignal
from PyQt5.QtGui import QColor

from typing import List, Optional, Any, Dict

from stock_control.business_logic.entities.product_entity import ProductEntity
from stock_control.business_logic.product_manager import ProductManager
from stock_control.constants import ProductCategory
from stock_control.exceptions import DuplicateCodeError, StockControlError
import logging
from decimal import Decimal
logger = logging.getLogger(__name__)

# --- Custom Table Model for Products ---
class ProductTableModel(QAbstractTableModel):
    def __init__(self, data: Optional[List[ProductEntity]] = None, parent=None):
        super().__init__(parent)
        self._data: List[ProductEntity] = data if data is not None else []
        self._headers = ["ID", "Code", "Name", "Category", "Unit Price", "Stock", "Stock Value"]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return QVariant()

        row = index.row()
        col = index.column()

        if not (0 <= row < len(self._data)):
            return QVariant()
        product = self._data[row]

        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0: return str(product.id)
            elif col == 1: return product.code
            elif col == 2: return product.name
            elif col == 3: return product.category.value
            elif col == 4: return f"{product.unit_price:,.2f}"
            elif col == 5: return str(product.stock_quantity)
            elif col == 6: return f"{product.stock_value:,.2f}"

        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col in [0, 5]:
                return Qt.AlignmentFlag.AlignCenter | Qt.AlignmentFlag.AlignVCenter
            if col in [4, 6]:
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            return Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter

        elif role == Qt.ItemDataRole.ForegroundRole:
            if product.stock_quantity == 0:
                return QColor(Qt.GlobalColor.red)

        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[ProductEntity]):
        logger.debug(f"Updating product table model with {len(new_data)} rows.")
        self.beginResetModel()
        self._data = new_data
        self.endResetModel()

    def get_product_at_row(self, row: int) -> Optional[ProductEntity]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None

# --- Add Product Dialog ---
class ProductDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("New Product")
        self.setMinimumWidth(400)

        layout = QFormLayout(self)

        self.code_edit = QLineEdit(self)
        self.name_edit = QLineEdit(self)
        self.category_combo = QComboBox(self)
        self.unit_price_spinbox = QDoubleSpinBox(self)
        self.initial_stock_spinbox = QSpinBox(self)

        for category in ProductCategory:
            self.category_combo.addItem(category.value, category)

        self.unit_price_spinbox.setDecimals(2); self.unit_price_spinbox.setMinimum(0.00)
        self.unit_price_spinbox.setMaximum(999999999.99); self.unit_price_spinbox.setGroupSeparatorShown(True)

        self.initial_stock_spinbox.setMinimum(0)
        self.initial_stock_spinbox.setMaximum(9999999)

        layout.addRow("Code:", self.code_edit)
        layout.addRow("Name:", self.name_edit)
        layout.addRow("Category:", self.category_combo)
        layout.addRow("Unit price:", self.unit_price_spinbox)
        layout.addRow("Initial stock:", self.initial_stock_spinbox)

        self.button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel,
                                           Qt.Orientation.Horizontal, self)
        layout.addWidget(self.button_box)

        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)

    def get_product_data(self) -> Optional[Dict[str, Any]]:
        if not self.code_edit.text().strip() or not self.name_edit.text().strip():
            QMessageBox.warning(self, "Invalid input", "Code and name are required.")
            return None

        return {
            "code": self.code_edit.text().strip(),
            "name": self.name_edit.text().strip(),
            "category": self.category_combo.currentData(),
            # via str() so 19.9 doesn't turn into 19.899999...
            "unit_price": Decimal(str(round(self.unit_price_spinbox.value(), 2))),
            "stock_quantity": self.initial_stock_spinbox.value(),
        }


# --- Main Products UI Widget ---
class ProductsUI(QWidget):
    products_changed = pyqtSignal()

    def __init__(self, product_manager: ProductManager, parent=None):
        super().__init__(parent)
        self.product_manager = product_manager
        self.table_model = ProductTableModel()
        self._init_ui()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)

        filter_layout = QHBoxLayout()
        self.category_filter_combo = QComboBox(self)
        self.category_filter_combo.addItem("All categories", None)
        for category in ProductCategory:
            self.category_filter_combo.addItem(category.value, category)
        self.category_filter_combo.currentIndexChanged.connect(self.load_products_data)
        filter_layout.addWidget(QLabel("Category:"))
        filter_layout.addWidget(self.category_filter_combo)
        filter_layout.addStretch()
        main_layout.addLayout(filter_layout)

        self.table_view = QTableView()
        self.table_view.setModel(self.table_model)
        self.table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)

        header = self.table_view.horizontalHeader()
        if header:
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setSectionResizeMode(2, QHeaderView.ResizeMode.Stretch)
        main_layout.addWidget(self.table_view)

        button_layout = QHBoxLayout()
        self.add_button = QPushButton("Add Product")
        self.delete_button = QPushButton("Delete Product")
        self.refresh_button = QPushButton("Reload")

        self.add_button.clicked.connect(self._open_add_product_dialog)
        self.delete_button.clicked.connect(self._delete_selected_product)
        self.refresh_button.clicked.connect(self.load_products_data)

        button_layout.addWidget(self.add_button)
        button_layout.addWidget(self.delete_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)

        main_layout.addLayout(button_layout)
        self.setLayout(main_layout)
        logger.info("ProductsUI initialized.")
        self.load_products_data()

    def load_products_data(self):
        category = self.category_filter_combo.currentData()
        logger.debug(f"Loading products data... (Category: {category})")
        products = self.product_manager.get_all_products(category_filter=category)
        self.table_model.update_data(products)

    def _open_add_product_dialog(self):
        dialog = ProductDialog(parent=self)
        if dialog.exec_() != QDialog.DialogCode.Accepted:
            return
        product_data = dialog.get_product_data()
        if not product_data:
            return
        try:
            created_product = self.product_manager.create_product(**product_data)
            QMessageBox.information(self, "Success", f"Product '{created_product.name}' added.")
            self.load_products_data()
            self.products_changed.emit()
        except DuplicateCodeError as e:
            QMessageBox.warning(self, "Duplicate code", f"Code '{e.product_code}' is already registered.")
        except StockControlError as e:
            QMessageBox.warning(self, "Validation error", str(e))
        except OSError as e:
            logger.error(f"Error adding product: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not save the product: {e}")

    def _delete_selected_product(self):
        selection_model = self.table_view.selectionModel()
        if not selection_model or not selection_model.hasSelection():
            QMessageBox.information(self, "No selection", "Select a product to delete.")
            return

        product = self.table_model.get_product_at_row(selection_model.selectedRows()[0].row())
        if product is None:
            return

        reply = QMessageBox.question(self, "Confirm deletion",
                                     f"Delete product '{product.code} - {product.name}'?\n"
                                     "Its movement history will be deleted as well.",
                                     QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                     QMessageBox.StandardButton.No)
        if reply != QMessageBox.StandardButton.Yes:
            return
        try:
            self.product_manager.delete_product(product.code)
            self.load_products_data()
            self.products_changed.emit()
        except StockControlError as e:
            QMessageBox.warning(self, "Error", str(e))
        except OSError as e:
            logger.error(f"Error deleting product: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not save the product list: {e}")
