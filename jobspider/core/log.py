"""
Logging setup for the spiders.
"""

import logging
from logging.handlers import RotatingFileHandler

from jobspider import settings


def setup_logging(code: str) -> logging.Logger:
    """
    Configure the `jobspider` logger to write to console and a rotating file.

    Args:
        code: Source code (e.g. "NSW"); logs go to logs/<code>/

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("jobspider")
    logger.setLevel(logging.INFO)

    # Prevent duplicate handlers if called more than once (batch runs)
    for handler in list(logger.handlers):
        if isinstance(handler, RotatingFileHandler):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    log_dir = settings.LOGS_DIR / code
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_dir / f"{code.lower()}_scraper.log",
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
