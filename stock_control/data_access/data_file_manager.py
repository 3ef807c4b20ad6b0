# stock_control/data_access/data_file_manager.py

import csv
import os
import tempfile
import logging
from typing import Iterable, List, Sequence, Tuple

from stock_control.config import DATA_DIR, MOVEMENTS_FILE_NAME, PRODUCTS_FILE_NAME
from stock_control.constants import RECORD_DELIMITER
from stock_control.exceptions import RecordFormatError

logger = logging.getLogger(__name__)

CSV_FORMAT = {
    "delimiter": RECORD_DELIMITER,
    "quoting": csv.QUOTE_NONE,
    "quotechar": None,
    "lineterminator": "\n",
}

class DataFileManager:
    """Reads and rewrites the delimited data files kept in one directory."""

    def __init__(self, data_dir=DATA_DIR):
        self.data_dir = data_dir

    def path_for(self, file_name: str) -> str:
        return os.path.join(self.data_dir, file_name)

    def create_files(self, file_names: Sequence[str] = (PRODUCTS_FILE_NAME, MOVEMENTS_FILE_NAME)):
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            for file_name in file_names:
                path = self.path_for(file_name)
                if not os.path.exists(path):
                    open(path, "a", encoding="utf-8").close()
                    logger.info(f"Created empty data file {path}")
        except OSError as e:
            logger.error(f"Failed to initialize data directory {self.data_dir}: {e}", exc_info=True)
            raise

    def read_records(self, file_name: str) -> List[Tuple[int, List[str]]]:
        """Returns (line number, fields) for every non-blank line of the file."""
        path = self.path_for(file_name)
        if not os.path.exists(path):
            logger.debug(f"Data file {path} doesn't exist yet. Nothing to read.")
            return []
        records = []
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                reader = csv.reader(f, **CSV_FORMAT)
                for row in reader:
                    if not any(field.strip() for field in row):
                        continue
                    records.append((reader.line_num, row))
        except OSError as e:
            logger.error(f"Reading {path} failed: {e}")
            raise
        logger.debug(f"Read {len(records)} records from {path}")
        return records

    def write_records(self, file_name: str, records: Iterable[Sequence[str]]) -> None:
        """Rewrites the whole file. The previous content stays in place if writing fails."""
        rows = []
        for index, row in enumerate(records, start=1):
            for field in row:
                if RECORD_DELIMITER in field or "\n" in field or "\r" in field:
                    raise RecordFormatError(
                        f"Field {field!r} contains the record delimiter or a line break", file_name, index
                    )
            rows.append(row)

        path = self.path_for(file_name)
        os.makedirs(self.data_dir, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(prefix=f".{file_name}.", suffix=".tmp", dir=self.data_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, **CSV_FORMAT)
                writer.writerows(rows)
            os.replace(temp_path, path)
        except OSError as e:
            logger.error(f"Writing {path} failed: {e}", exc_info=True)
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise
        logger.debug(f"Wrote {len(rows)} records to {path}")
