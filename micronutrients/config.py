"""
Runtime configuration

Values come from the environment (a local .env file is loaded first):
- MICRONUTRIENTS_DB_PATH: SQLite file holding reference and client tables
- MICRONUTRIENTS_LOG_LEVEL: root log level used by configure_logging()
"""

import os
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DB_PATH = Path(os.getenv("MICRONUTRIENTS_DB_PATH", "micronutrients_database.db"))
LOG_LEVEL = os.getenv("MICRONUTRIENTS_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging for scripts and local runs"""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
