"""
Logging for transfer-bank: everything at LOG_LEVEL goes to
<LOG_DIR>/transfer_bank.log (rotated), warnings and above also reach stderr.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union

SERVICE_LOGGER = "transfer_bank"
LOG_FILE_NAME = "transfer_bank.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROTATE_AT_BYTES = 10 * 1024 * 1024
KEEP_FILES = 5


def _build_handlers(log_file: Path, level: int) -> List[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    to_file = RotatingFileHandler(
        log_file, maxBytes=ROTATE_AT_BYTES, backupCount=KEEP_FILES, encoding="utf-8"
    )
    to_file.setLevel(level)

    to_stderr = logging.StreamHandler()
    to_stderr.setLevel(logging.WARNING)

    for handler in (to_file, to_stderr):
        handler.setFormatter(formatter)
    return [to_file, to_stderr]


def setup_logging(log_level: Optional[str] = None, log_dir: Union[str, Path, None] = None) -> None:
    """
    Attach fresh handlers to the service logger. Safe to call once per app:
    handlers from a previous call are closed first.
    """
    level_name = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    directory = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    directory.mkdir(parents=True, exist_ok=True)

    logging.getLogger().setLevel(level)

    service = logging.getLogger(SERVICE_LOGGER)
    service.setLevel(level)
    for old in list(service.handlers):
        service.removeHandler(old)
        old.close()
    for handler in _build_handlers(directory / LOG_FILE_NAME, level):
        service.addHandler(handler)

    # DB_ECHO turns SQL logging on through the engine itself
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
