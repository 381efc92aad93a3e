"""
logging_config.py — Centralized Logging Configuration for the Pedidos Service

This module configures unified logging behavior for the whole API.
Every module logs through the same format and handlers.

Features:
    • Console output (stdout) with optional file output
    • Process ID tagging for multi-worker visibility
    • Standardized log format for all modules
    • Reduced verbosity for external dependencies (uvicorn access log, Google SDK)
"""

import logging
import sys

from .config import LOG_FILE, LOG_LEVEL

LOG_FORMAT = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(message)s'


def setup_logging(level: str = LOG_LEVEL, log_file: str = LOG_FILE):
    """
    Configures the global logging system for the application.

    The configuration includes:
        - Log level: taken from LOG_LEVEL (default INFO)
        - Log format: timestamp, log level, process ID, and message
        - Output destinations:
            1. Console (stdout): real-time logs, Docker/Kubernetes compatible
            2. File: LOG_FILE, skipped when the variable is empty
        - Reduced verbosity for third-party libraries
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)


def get_logger(name):
    """
    Returns a logger for a given module or component name.

    Args:
        name (str): The logger name, typically the module's __name__.

    Returns:
        logging.Logger: A logger that follows the global format and handlers.
    """
    return logging.getLogger(name)
