"""Logging setup."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO) -> None:
    """Configure a simple root logger; safe to call more than once."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
    else:
        root.setLevel(level)


def parse_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"invalid log level: {value!r}")
    return level
