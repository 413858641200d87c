"""
Logging for nicestack.

Every module logs through ``get_logger(__name__)`` under the ``nicestack``
hierarchy. What gets logged:

- ``layer_registry``: layers attached or cleared, rejected duplicate names,
  ignored non-callable accessors (warning).
- ``stack_composer``: length or key mismatches between layers (warning) before a
  StackAlignmentError is raised.
- ``stack_engine``: group replacement, per-compose visible/domain summary
  (debug), legend toggles without a render trigger.
- ``stack_state``: unknown or unusable keys in ``StackState.from_dict``.

The package installs only a NullHandler. A host chart or script that wants
to see these messages calls ``configure_logging()`` once, e.g. the demo in
``examples/stacked_layers_demo.py``::

    from nicestack.utils.logging import configure_logging
    configure_logging(level="DEBUG")

The level can also come from the ``NICESTACK_LOG_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "nicestack"

# Default format for nicestack logs
DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the nicestack logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to NICESTACK_LOG_LEVEL
        env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to DEFAULT_FMT.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding a new one. If False,
        keep an already installed stderr handler and only update the level.
    """
    if level is None:
        level = os.environ.get("NICESTACK_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                h.setLevel(level)
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'nicestack' logger.
    Otherwise, returns logging.getLogger(name).
    """
    if name is None:
        name = LOGGER_NAME
    return logging.getLogger(name)
