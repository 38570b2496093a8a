"""Shared logging helpers for the engine and the runner."""

from __future__ import annotations

import logging
import os
from typing import Optional

from . import config_manager as config_manager

_LOGGER_INITIALISED = False


def _initialise_root(level: str) -> None:
    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGER_INITIALISED = True


def configured_level() -> str:
    env_level = os.getenv("EXPREVAL_LOG_LEVEL", "").strip()
    if env_level:
        return env_level.upper()
    return str(config_manager.load_setting_value("log_level")).upper()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    _initialise_root(configured_level())
    return logging.getLogger(name or "expreval")
