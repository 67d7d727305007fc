# utils/logging.py
"""Logging configuration for the API server.

Level comes from the LOG_LEVEL env var (default INFO). Set LOG_LEVEL=WARNING
for production, DEBUG for verbose output including carry-forward details.
"""
import logging
import os
import sys

# Map string level names to logging constants
LOG_LEVEL_MAP = {
     "DEBUG": logging.DEBUG,
     "INFO": logging.INFO,
     "WARNING": logging.WARNING,
     "ERROR": logging.ERROR,
     "CRITICAL": logging.CRITICAL,
}


def get_log_level() -> int:
     """Get logging level from LOG_LEVEL environment variable (default: INFO)."""
     level_str = os.getenv("LOG_LEVEL", "INFO").upper()
     return LOG_LEVEL_MAP.get(level_str, logging.INFO)


def setup_logging() -> None:
     """Configure the root logger with a single stdout handler."""
     formatter = logging.Formatter(
          fmt="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
          datefmt="%Y-%m-%d %H:%M:%S",
     )
     log_level = get_log_level()

     root_logger = logging.getLogger()
     root_logger.setLevel(log_level)

     # Remove any existing handlers to avoid duplicates on reload
     root_logger.handlers.clear()

     stdout_handler = logging.StreamHandler(sys.stdout)
     stdout_handler.setLevel(log_level)
     stdout_handler.setFormatter(formatter)
     root_logger.addHandler(stdout_handler)
