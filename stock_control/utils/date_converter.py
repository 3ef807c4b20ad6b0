# stock_control/utils/date_converter.py

from datetime import date, datetime
from typing import Optional, Union

from stock_control.constants import DATE_FORMAT, DATETIME_FORMAT


def to_display_str(value: Optional[Union[date, datetime]]) -> str:
    """Formats a date or datetime as dd/mm/yyyy [HH:MM] for display."""
    if value is None:
        return "-"
    if isinstance(value, datetime):
        return value.strftime(DATETIME_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    return str(value)


def from_qdatetime(q_datetime: 'QDateTime') -> datetime:
    """Converts a PyQt QDateTime to a naive datetime, truncated to the minute."""
    return q_datetime.toPyDateTime().replace(second=0, microsecond=0)


def to_qdatetime(value: Optional[datetime]) -> 'QDateTime':
    """Converts a datetime to a PyQt QDateTime. None gives the current time."""
    from PyQt5.QtCore import QDate, QDateTime, QTime
    if value is None:
        return QDateTime.currentDateTime()
    return QDateTime(QDate(value.year, value.month, value.day), QTime(value.hour, value.minute))
