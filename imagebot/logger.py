"""
Logging configuration for the image generator bot
"""
import logging
import sys
import os
from typing import Optional

# Third-party loggers that are noisy at INFO; httpx also logs Telegram request
# URLs, which embed the bot token
QUIET_LOGGERS = ("httpx", "httpcore", "telegram.ext.Updater", "google_genai")

def setup_logger(name: str = "imagebot", level: Optional[str] = None) -> logging.Logger:
    """
    Set up the application logger

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, level, logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    for noisy in QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(max(log_level, logging.WARNING))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(handler)

    return logger

logger = setup_logger()
