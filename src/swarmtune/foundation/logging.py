"""Opt-in console logging for the swarmtune command line.

Library modules only create loggers under the ``swarmtune`` namespace; a
handler is attached here, on request, and never through
``logging.basicConfig``.
"""

from __future__ import annotations

import logging
from typing import TextIO

CONSOLE_FORMAT = "%(message)s"
DETAILED_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_swarmtune_logging(
    *,
    level: int = logging.INFO,
    fmt: str = CONSOLE_FORMAT,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach one stream handler to the ``swarmtune`` logger and return it.

    Parameters
    ----------
    level : int
        Threshold for the package logger.
    fmt : str
        Record format. Meta-optimization progress lines read best with the
        bare :data:`CONSOLE_FORMAT`; :data:`DETAILED_FORMAT` adds time, level
        and the emitting module.
    stream : file-like, optional
        Destination, ``sys.stderr`` when omitted.

    Nothing is changed when the root logger or the package logger already has
    handlers, so an application's own configuration wins.
    """
    pkg_logger = logging.getLogger("swarmtune")
    if logging.getLogger().handlers or pkg_logger.handlers:
        return pkg_logger

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level)
    pkg_logger.propagate = False
    return pkg_logger


__all__ = ["CONSOLE_FORMAT", "DETAILED_FORMAT", "configure_swarmtune_logging"]
