# stock_control/presentation/balance_ui.py

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QLabel, QPushButton, QMessageBox,
                             QFormLayout, QGroupBox, QDateTimeEdit)
from PyQt5.QtGui import QFont
from datetime import datetime, timedelta

from stock_control.business_logic.movement_manager import MovementManager
from stock_control.config import CURRENCY_SYMBOL, DEFAULT_PERIOD_DAYS
from stock_control.exceptions import StockControlError
from stock_control.utils import date_converter

import logging
logger = logging.getLogger(__name__)


class BalanceUI(QWidget):
    def __init__(self, movement_manager: MovementManager, parent=None):
        super().__init__(parent)
        self.movement_manager = movement_manager
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        bold = QFont(); bold.setBold(True)

        totals_group = QGroupBox("Current stock")
        totals_layout = QFormLayout(totals_group)
        self.total_quantity_label = QLabel("0")
        self.total_value_label = QLabel(f"{CURRENCY_SYMBOL} 0.00")
        self.total_quantity_label.setFont(bold)
        self.total_value_label.setFont(bold)
        totals_layout.addRow("Total quantity:", self.total_quantity_label)
        totals_layout.addRow("Total value:", self.total_value_label)
        layout.addWidget(totals_group)

        period_group = QGroupBox("Movements value in period")
        period_layout = QFormLayout(period_group)
        now = datetime.now().replace(second=0, microsecond=0)
        self.start_edit = QDateTimeEdit(date_converter.to_qdatetime(now - timedelta(days=DEFAULT_PERIOD_DAYS)), self)
        self.end_edit = QDateTimeEdit(date_converter.to_qdatetime(now), self)
        for edit in (self.start_edit, self.end_edit):
            edit.setDisplayFormat("dd/MM/yyyy HH:mm")
            edit.setCalendarPopup(True)
        self.query_button = QPushButton("Calculate")
        self.period_value_label = QLabel(f"{CURRENCY_SYMBOL} 0.00")
        self.period_value_label.setFont(bold)
        period_layout.addRow("Start:", self.start_edit)
        period_layout.addRow("End:", self.end_edit)
        period_layout.addRow(self.query_button)
        period_layout.addRow("Value in period:", self.period_value_label)
        layout.addWidget(period_group)
        layout.addStretch()

        self.query_button.clicked.connect(self._calculate_period)
        self.refresh()

    def refresh(self):
        summary = self.movement_manager.balance_summary()
        self.total_quantity_label.setText(str(summary["total_quantity"]))
        self.total_value_label.setText(f"{CURRENCY_SYMBOL} {summary['total_value']:,.2f}")

    def _calculate_period(self):
        start = date_converter.from_qdatetime(self.start_edit.dateTime())
        # inclusive of the whole end minute
        end = date_converter.from_qdatetime(self.end_edit.dateTime()).replace(second=59, microsecond=999999)
        try:
            summary = self.movement_manager.balance_summary(start, end)
        except StockControlError as e:
            QMessageBox.warning(self, "Error", str(e))
            return
        self.period_value_label.setText(f"{CURRENCY_SYMBOL} {summary['period_value']:,.2f}")
        logger.info(f"Period value from {start} to {end}: {summary['period_value']}")
        self.refresh()
