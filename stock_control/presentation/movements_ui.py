# stock_control/presentation/movements_ui.py

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QLabel, QTableView, QPushButton,
                             QHBoxLayout, QMessageBox, QDialog, QLineEdit, QComboBox,
                             QFormLayout, QDialogButtonBox, QAbstractItemView,
                             QDoubleSpinBox, QSpinBox, QHeaderView, QDateTimeEdit)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex
from PyQt5.QtGui import QColor

from typing import List, Optional, Any, Dict
from decimal import Decimal

from stock_control.business_logic.entities.inventory_movement_entity import InventoryMovementEntity
from stock_control.business_logic.movement_manager import MovementManager
from stock_control.business_logic.product_manager import ProductManager
from stock_control.constants import MovementKind, MovementView, OUTBOUND_KINDS
from stock_control.exceptions import InsufficientStockError, StockControlError
from stock_control.utils import date_converter
import logging
logger = logging.getLogger(__name__)

DETAIL_LABELS = {
    MovementKind.INBOUND: "Supplier:",
    MovementKind.SALE: "Client:",
    MovementKind.INTERNAL_USE: "Destination:",
    MovementKind.SUPPLIER_RETURN: "Supplier:",
    MovementKind.OTHER_OUTBOUND: "Reason:",
}

class MovementTableModel(QAbstractTableModel):
    def __init__(self, data: Optional[List[InventoryMovementEntity]] = None, parent=None):
        super().__init__(parent)
        self._data: List[InventoryMovementEntity] = data if data is not None else []
        self._headers = ["Date", "Type", "Product", "Quantity", "Unit Price", "Value", "Detail"]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._data)):
            return QVariant()
        movement = self._data[index.row()]
        col = index.column()

        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0: return date_converter.to_display_str(movement.movement_date)
            elif col == 1: return movement.kind_label()
            elif col == 2: return movement.product_code
            elif col == 3: return str(movement.signed_quantity)
            elif col == 4: return f"{movement.unit_price:,.2f}"
            elif col == 5: return f"{movement.signed_value:,.2f}"
            elif col == 6: return movement.extra_detail
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col in [3, 4, 5]:
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        elif role == Qt.ItemDataRole.ForegroundRole:
            return QColor("darkgreen") if movement.is_inbound else QColor("darkred")
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[InventoryMovementEntity]):
        self.beginResetModel()
        self._data = new_data
        self.endResetModel()


class MovementDialog(QDialog):
    """Registers an inbound movement, or an outbound one of the kind picked in the dialog."""

    def __init__(self, product_manager: ProductManager, inbound: bool, parent=None):
        super().__init__(parent)
        self.product_manager = product_manager
        self.inbound = inbound
        self.setWindowTitle("Register Inbound" if inbound else "Register Outbound")
        self.setMinimumWidth(420)

        layout = QFormLayout(self)

        self.kind_combo = QComboBox(self)
        kinds = [MovementKind.INBOUND] if inbound else OUTBOUND_KINDS
        for kind in kinds:
            self.kind_combo.addItem(kind.label, kind)
        self.kind_combo.setEnabled(not inbound)

        self.product_combo = QComboBox(self)
        for product in self.product_manager.get_all_products():
            self.product_combo.addItem(f"{product.code} - {product.name} (stock: {product.stock_quantity})", product.code)
        self.product_combo.currentIndexChanged.connect(self._on_product_changed)

        self.quantity_spinbox = QSpinBox(self)
        self.quantity_spinbox.setMinimum(1); self.quantity_spinbox.setMaximum(9999999)

        self.unit_price_spinbox = QDoubleSpinBox(self)
        self.unit_price_spinbox.setDecimals(2); self.unit_price_spinbox.setMinimum(0.00)
        self.unit_price_spinbox.setMaximum(999999999.99); self.unit_price_spinbox.setGroupSeparatorShown(True)

        self.date_edit = QDateTimeEdit(date_converter.to_qdatetime(None), self)
        self.date_edit.setDisplayFormat("dd/MM/yyyy HH:mm")
        self.date_edit.setCalendarPopup(True)

        self.detail_label = QLabel(DETAIL_LABELS[kinds[0]], self)
        self.detail_edit = QLineEdit(self)
        self.kind_combo.currentIndexChanged.connect(self._on_kind_changed)

        layout.addRow("Type:", self.kind_combo)
        layout.addRow("Product:", self.product_combo)
        layout.addRow("Quantity:", self.quantity_spinbox)
        layout.addRow("Unit price:", self.unit_price_spinbox)
        layout.addRow("Date:", self.date_edit)
        layout.addRow(self.detail_label, self.detail_edit)

        self.button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel,
                                           Qt.Orientation.Horizontal, self)
        layout.addWidget(self.button_box)
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)

        self._on_product_changed()

    def _on_kind_changed(self):
        self.detail_label.setText(DETAIL_LABELS[self.kind_combo.currentData()])

    def _on_product_changed(self):
        product = self.product_manager.get_product_by_code(self.product_combo.currentData())
        if product is not None:
            self.unit_price_spinbox.setValue(float(product.unit_price))

    def get_movement_data(self) -> Optional[Dict[str, Any]]:
        if self.product_combo.currentData() is None:
            QMessageBox.warning(self, "Invalid input", "Register a product first.")
            return None
        return {
            "kind": self.kind_combo.currentData(),
            "code": self.product_combo.currentData(),
            "quantity": self.quantity_spinbox.value(),
            "unit_price": Decimal(str(round(self.unit_price_spinbox.value(), 2))),
            "movement_date": date_converter.from_qdatetime(self.date_edit.dateTime()),
            "detail": self.detail_edit.text().strip() or None,
        }


class MovementsUI(QWidget):
    def __init__(self, movement_manager: MovementManager, product_manager: ProductManager, parent=None):
        super().__init__(parent)
        self.movement_manager = movement_manager
        self.product_manager = product_manager
        self.table_model = MovementTableModel()
        self._init_ui()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)

        filter_layout = QHBoxLayout()
        self.view_combo = QComboBox(self)
        self.view_combo.addItem("All (registration order)", MovementView.ALL)
        self.view_combo.addItem("Inbound", MovementView.INBOUND)
        self.view_combo.addItem("Outbound", MovementView.OUTBOUND)
        self.view_combo.addItem("All (by date)", MovementView.CHRONOLOGICAL)
        self.view_combo.currentIndexChanged.connect(self.load_movements_data)
        filter_layout.addWidget(QLabel("Show:"))
        filter_layout.addWidget(self.view_combo)
        filter_layout.addStretch()
        main_layout.addLayout(filter_layout)

        self.table_view = QTableView()
        self.table_view.setModel(self.table_model)
        self.table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        header = self.table_view.horizontalHeader()
        if header:
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setSectionResizeMode(6, QHeaderView.ResizeMode.Stretch)
        main_layout.addWidget(self.table_view)

        button_layout = QHBoxLayout()
        self.inbound_button = QPushButton("Register Inbound")
        self.outbound_button = QPushButton("Register Outbound")
        self.refresh_button = QPushButton("Reload")
        self.inbound_button.clicked.connect(lambda: self._open_movement_dialog(inbound=True))
        self.outbound_button.clicked.connect(lambda: self._open_movement_dialog(inbound=False))
        self.refresh_button.clicked.connect(self.load_movements_data)
        button_layout.addWidget(self.inbound_button)
        button_layout.addWidget(self.outbound_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)

        logger.info("MovementsUI initialized.")
        self.load_movements_data()

    def load_movements_data(self):
        view = self.view_combo.currentData()
        movements = self.movement_manager.list_movements(view)
        logger.debug(f"{len(movements)} movements loaded into table (view: {view}).")
        self.table_model.update_data(movements)

    def _open_movement_dialog(self, inbound: bool):
        dialog = MovementDialog(self.product_manager, inbound=inbound, parent=self)
        if dialog.exec_() != QDialog.DialogCode.Accepted:
            return
        data = dialog.get_movement_data()
        if not data:
            return
        try:
            if inbound:
                movement = self.movement_manager.record_inbound(
                    code=data["code"], quantity=data["quantity"], unit_price=data["unit_price"],
                    movement_date=data["movement_date"], supplier_name=data["detail"])
            else:
                movement = self.movement_manager.record_outbound(**data)
            QMessageBox.information(self, "Success", f"{movement.kind_label()} of {movement.quantity} registered.")
            self.load_movements_data()
        except InsufficientStockError as e:
            QMessageBox.warning(self, "Insufficient stock",
                                f"Only {e.available} unit(s) of '{e.product_code}' in stock; {e.requested} requested.")
        except StockControlError as e:
            QMessageBox.warning(self, "Movement rejected", str(e))
        except OSError as e:
            logger.error(f"Error registering movement: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not save the movement: {e}")
