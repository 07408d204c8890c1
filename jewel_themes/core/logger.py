from __future__ import annotations

import logging
from typing import Optional

_FORMAT = "%(levelname)s %(name)s: %(message)s"
_ROOT = "jewel_themes"

# Handler installed by configure_logging, replaced on each call
_cli_handler: Optional[logging.Handler] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger namespaced under the package root."""
    if not name:
        return logging.getLogger(_ROOT)
    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT}.{name}")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Attach a stderr handler to the package logger (CLI use)."""
    global _cli_handler

    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING

    root = logging.getLogger(_ROOT)
    root.setLevel(level)
    if _cli_handler is not None:
        root.removeHandler(_cli_handler)

    _cli_handler = logging.StreamHandler()
    _cli_handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(_cli_handler)
