# stock_control/config.py

import os
import logging

# --- Data Files Configuration ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__))) # project root
DATA_DIR = os.environ.get("STOCK_CONTROL_DATA_DIR", os.path.join(BASE_DIR, "data"))
PRODUCTS_FILE_NAME = "products.csv"
MOVEMENTS_FILE_NAME = "movements.csv"

# --- Logging Configuration ---
LOGS_DIR = os.environ.get("STOCK_CONTROL_LOGS_DIR", os.path.join(BASE_DIR, "logs"))
LOG_FILE_NAME = "app.log"
LOG_FILE_PATH = os.path.join(LOGS_DIR, LOG_FILE_NAME)

LOG_LEVEL = logging.DEBUG
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s'

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': LOG_FORMAT,
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
            'level': logging.DEBUG,
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'formatter': 'standard',
            'filename': LOG_FILE_PATH,
            'maxBytes': 1024*1024*5,  # 5 MB
            'backupCount': 5,
            'level': logging.INFO,
            'encoding': 'utf-8',
        },
    },
    'root': {
        'handlers': ['console', 'file'],
        'level': LOG_LEVEL,
    },
}

# --- Application Settings ---
APP_TITLE = "Stock Control - Computer Store"
CURRENCY_SYMBOL = "R$"
DEFAULT_PERIOD_DAYS = 30


def ensure_directories():
    """Creates the data and logs directories if they don't exist."""
    for directory in (DATA_DIR, LOGS_DIR):
        if not os.path.exists(directory):
            os.makedirs(directory)
