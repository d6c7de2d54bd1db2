"""Logging setup.

Modules log through logging.getLogger(__name__); this installs a Rich
handler on the root logger once per process.
"""

import logging

from rich.logging import RichHandler

_configured = False


def configure_logging(level: str | int = "INFO") -> None:
    """Route log records to a Rich handler at the given level."""
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    if _configured:
        return

    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
    root.addHandler(handler)
    _configured = True
