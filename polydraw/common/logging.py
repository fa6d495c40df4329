"""Centralized logging configuration for polydraw.

Loguru is the single logging facade. Modules import ``logger`` from loguru
directly; hosts call :func:`configure_logging` once at startup.

Usage (in scripts/hosts):
    >>> from polydraw.common.logging import configure_logging
    >>> from loguru import logger
    >>> configure_logging(verbose=True)
    >>> logger.info("Editor ready")

Usage (in modules):
    >>> from loguru import logger
    >>> logger.debug("Rejected vertex {}", (1.0, 2.0))
"""

from __future__ import annotations

import sys

from loguru import logger


def configure_logging(verbose: bool = False) -> None:
    """Configure the global loguru logger.

    # <https://loguru.readthedocs.io/en/stable/>

    Args:
        verbose: If True, enable DEBUG level (shows rejected gestures);
            if False, use INFO level.

    Note:
        Idempotent: the default handler and any previous sink are removed first.
    """
    logger.remove()

    log_format = (
        "<level>{level: <7}</level>| "
        "<dim><cyan>{file}:{line}</cyan></dim> | "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        format=log_format,
        level="DEBUG" if verbose else "INFO",
        colorize=True,
        backtrace=True if verbose else False,
        diagnose=True if verbose else False,
    )

    logger.level("DEBUG", color="<dim><white>")
    logger.level("WARNING", color="<fg #ffff00><bold>")
    logger.level("ERROR", color="<fg #ff0000><bold>")
