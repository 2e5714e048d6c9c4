# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Opt-in Rich log rendering for the ``linode_api`` logger hierarchy."""

from __future__ import annotations

import logging
import sys
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME: Final[str] = "linode_api"


def detect_tty() -> bool:
    """Return ``True`` when stderr appears to be backed by a terminal."""

    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


def configure_logging(level: int | str = logging.INFO, *, use_color: bool | None = None) -> logging.Logger:
    """Attach a :class:`RichHandler` to the package logger.

    Calling this again replaces the handler installed by the previous call
    instead of stacking another one.

    Args:
        level: Logging level applied to the package logger.
        use_color: Force colour on or off; follows TTY detection when ``None``.

    Returns:
        logging.Logger: The configured ``linode_api`` logger.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = Console(
        stderr=True,
        color_system="auto" if color_enabled else None,
        no_color=not color_enabled,
        soft_wrap=True,
    )
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=console, show_path=False, rich_tracebacks=False))
    logger.setLevel(level)
    return logger


__all__ = ["ROOT_LOGGER_NAME", "configure_logging"]
