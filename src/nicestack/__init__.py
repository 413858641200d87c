"""
nicestack: stacked-series composition for charts.

This package provides:
- StackEngine: aligns named layers on a shared key space, stacks them and
  derives axis extents and legend entries
- Data source adapters for pandas DataFrames and plain row lists
- Logging utilities for library and application use

For logging configuration in standalone scripts:
    ```python
    from nicestack.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library, logging is handled by the parent application's
configuration.
"""

import logging

from nicestack.utils.logging import configure_logging, get_logger

from nicestack.stack_engine import (
    DataFrameGroup,
    LegendEntry,
    StackAlignmentError,
    StackEngine,
    StackSnapshot,
    StackState,
    StaticGroup,
    XDomain,
)

# NullHandler so logs don't propagate to root when no application has
# configured logging.
_logger = logging.getLogger("nicestack")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "DataFrameGroup",
    "LegendEntry",
    "StackAlignmentError",
    "StackEngine",
    "StackSnapshot",
    "StackState",
    "StaticGroup",
    "XDomain",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
