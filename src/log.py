import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging_to_console(level: str = "INFO", logger: Optional[logging.Logger] = None):
    logger = logger or logging.getLogger()
    logger.setLevel(level)
    if any(getattr(h, "_portal_console", False) for h in logger.handlers):
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._portal_console = True
    logger.addHandler(handler)
    return logger


def setup_logging_to_file(
    app: str,
    level: str = "INFO",
    logger: Optional[logging.Logger] = None,
    log_dir: str = "logs",
):
    logger = logger or logging.getLogger()
    logger.setLevel(level)
    os.makedirs(log_dir, exist_ok=True)

    handler = RotatingFileHandler(
        os.path.join(log_dir, f"{app}.log"), maxBytes=10 * 1024 * 1024, backupCount=5
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
