"""Logging configuration"""

import logging

from ..consts import PACKAGE_NAME


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Configure logging for the entire application"""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,  # Override any existing configuration
    )
    # httpx logs every request at INFO; keep it out of application output
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))
    return logging.getLogger(PACKAGE_NAME)
