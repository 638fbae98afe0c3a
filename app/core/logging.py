# app/core/logging.py
"""Logging configuration."""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "info") -> None:
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # SQL echo is controlled by the engine, keep the sqlalchemy loggers quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
