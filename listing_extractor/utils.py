"""
Utility functions for number parsing, timestamps and logging.
"""
import logging
from datetime import datetime, timezone
from typing import Optional


def init_logger(
    name: str = "listing_extractor",
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    log_file: Optional[str] = "listing_extractor.log"
) -> logging.Logger:
    """Initialize logger with console and optional file handlers."""
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    console_level_num = getattr(logging, console_level.upper(), logging.INFO)
    ch = logging.StreamHandler()
    ch.setLevel(console_level_num)

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_file:  # Create file handler only if log_file is provided
        file_level_num = getattr(logging, file_level.upper(), logging.DEBUG)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level_num)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


def now_iso() -> str:
    """Return current UTC timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def to_float(text: Optional[str]) -> Optional[float]:
    """Safely convert text to float; thousands separators are ignored."""
    if text is None:
        return None
    if isinstance(text, (int, float)):
        return float(text)
    text = text.replace(",", "").strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def format_amount(value: Optional[float]) -> str:
    """Render a number without a trailing ".0" for whole values."""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
