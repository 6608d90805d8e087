import logging
import sys
from core.config import settings

ROOT_LOGGER_NAME = "brand_to_deck"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: str = None) -> logging.Logger:
    """Attach a single console handler to the application root logger"""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    level = level or ("DEBUG" if settings.debug else settings.log_level)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return root

def get_logger(name: str = None) -> logging.Logger:
    """Return a module logger under the application namespace"""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        setup_logging()
    if not name:
        return root
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
