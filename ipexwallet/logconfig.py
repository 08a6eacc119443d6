"""Logging set-up: one log file in the data directory."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Any

LOGGER_NAME = "ipexwallet"


def build_logger_configuration(data_dir: str | PathLike[str], app_name: str) -> dict[str, Any]:
    """Describe the logging set-up: INFO level, written to ``<app_name>.log``."""
    filename = Path(data_dir).absolute() / f"{app_name}.log"
    return {
        "globalLevel": logging.INFO,
        "loggers": [
            {"type": "file", "filename": str(filename), "level": logging.INFO},
        ],
    }


def configure_logging(data_dir: str | PathLike[str], app_name: str) -> logging.Logger:
    """Apply the configuration to the package logger and return it."""
    config = build_logger_configuration(data_dir, app_name)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(config["globalLevel"])
    for entry in config["loggers"]:
        if entry["type"] != "file":
            raise ValueError(f"unknown logger type: {entry['type']}")
        handler = logging.FileHandler(entry["filename"], encoding="utf-8")
        handler.setLevel(entry["level"])
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logger.addHandler(handler)
    return logger