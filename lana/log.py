"""Diagnostic logging setup.

User-facing output goes through Rich consoles in the commands; this only
wires stdlib loggers to a Rich handler on stderr.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False) -> None:
    """Route ``lana.*`` loggers through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logger = logging.getLogger("lana")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
