import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

from f29_engine.core.config import settings

LOG_DIR = Path(settings.log_dir)
LOG_FILE = LOG_DIR / "f29_engine.log"


def setup_logging():
    """Configure global logging: console and rotating file."""

    LOG_DIR.mkdir(exist_ok=True)

    # time | level | module:line | message
    log_format = logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s")
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    # 5 MB per file, 5 backups
    file_handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(log_format)
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_format)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # drop old handlers to avoid duplicate lines
    root_logger.handlers = []

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # route uvicorn request logs through the same handlers
    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        logger = logging.getLogger(logger_name)
        logger.handlers = [file_handler, console_handler]
        logger.propagate = False

    logging.info(f"✅ Logging initialized. Logs will be written to: {LOG_FILE.absolute()}")
