# tour_builder/settings.py
import logging
import os

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

LOG_LEVEL = os.getenv("TOUR_BUILDER_LOG_LEVEL", "INFO").upper()
CURRENCY = os.getenv("TOUR_BUILDER_CURRENCY", "PHP")
CATALOG_PATH = os.getenv("TOUR_BUILDER_CATALOG_PATH") or None
DEFAULT_COLOR_KEY = os.getenv("TOUR_BUILDER_DEFAULT_COLOR_KEY", "DEFAULT")


def allowed_origins() -> list:
    raw_origins = os.getenv("TOUR_BUILDER_ALLOWED_ORIGINS") or "*"
    origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    return origins or ["*"]


def get_logger(name: str) -> logging.Logger:
    """Module logger writing ``[LEVEL] name: message`` lines to stderr."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    logger.propagate = False
    return logger
