"""
Logging utilities for the freight back-office UI.

All module loggers are children of the ``freight_ui`` package logger, which
carries the only handler. Module loggers are named after their dotted
module path (``freight_ui.engine.screen``) so LOG_LEVEL can be overridden
per subpackage with the standard logging API.
"""

import logging
import os
from pathlib import Path

PACKAGE = "freight_ui"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure(level: str | None = None) -> logging.Logger:
    """
    Attach the stream handler to the package logger.

    Safe to call more than once; the handler is added only the first time
    and later calls only change the level.

    Args:
        level: Level name; defaults to the LOG_LEVEL environment variable.

    Returns:
        The package logger.
    """
    root = logging.getLogger(PACKAGE)
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root.setLevel(getattr(logging, level, logging.INFO))
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        root.addHandler(handler)
    return root


def module_name(path: str) -> str:
    """
    Dotted module name for a source path inside the package.

    Paths outside the package map to ``freight_ui.<stem>``.
    """
    parts = Path(path).with_suffix("").parts
    if PACKAGE in parts:
        index = len(parts) - 1 - parts[::-1].index(PACKAGE)
        parts = parts[index:]
        if parts[-1] == "__init__":
            parts = parts[:-1]
        return ".".join(parts)
    return f"{PACKAGE}.{parts[-1]}"


def logger(name: str) -> logging.Logger:
    """
    Return a logger under the package logger.

    Args:
        name: Logger name or __file__ path.

    Returns:
        A logger that propagates to the configured package logger.
    """
    if "/" in name or "\\" in name:
        name = module_name(name)
    elif name != PACKAGE and not name.startswith(PACKAGE + "."):
        name = f"{PACKAGE}.{name}"
    configure_once()
    return logging.getLogger(name)


def configure_once() -> None:
    if not logging.getLogger(PACKAGE).handlers:
        configure()
