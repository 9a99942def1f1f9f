"""Logging setup shared by the CLI and tests.

- stderr: configured level (stdout carries the CSV snapshot)
- file:   same level, only when LoggingConfig.log_file is set

Usage:
    from txledger.infra.logging import setup_logging
    setup_logging(LoggingConfig(level=logging.INFO))
"""

from __future__ import annotations

import logging
import sys

from txledger.infra.config import LoggingConfig

ROOT_LOGGER_NAME = "txledger"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Configure the package logger and return it.

    Existing handlers are removed first so repeated calls (tests, re-runs in
    one process) never duplicate output.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(config.level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.fmt, datefmt=config.datefmt)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(config.level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setLevel(config.level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(
        "logging initialised: level=%s file=%s",
        logging.getLevelName(config.level), config.log_file,
    )
    return logger
