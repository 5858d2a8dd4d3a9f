"""
Logging configuration for minicurl.

Log records go to standard error so that standard output carries only
narration and the response payload.
"""

import logging
import sys


def setup_logging(
    level: str = "WARNING",
    enable_console: bool = True,
) -> logging.Logger:
    """
    Set up logging for minicurl.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Enable console logging

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("minicurl")
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    logger.handlers.clear()

    console_fmt = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(console_fmt)
        logger.addHandler(console_handler)
    else:
        logger.addHandler(logging.NullHandler())

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def configure_logging(verbose: bool = False) -> None:
    """
    Quick logging configuration.

    Args:
        verbose: Enable debug logging
    """
    setup_logging(level="DEBUG" if verbose else "WARNING")
