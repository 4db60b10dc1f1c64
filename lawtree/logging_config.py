"""
Logging configuration for the lawtree converter

Includes IndentLogger for tree-style visualization of the document hierarchy
while records are being assembled.
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar

# Indentation depth of the current conversion (per context, not per process)
_indent_level: ContextVar[int] = ContextVar("lawtree_indent_level", default=0)

_TREE_CHARS = {
    "pipe": "│   ",
    "branch": "├── ",
}


class IndentLogger:
    """Logger wrapper that prefixes messages with the current tree indentation"""

    def __init__(self, base_logger: logging.Logger) -> None:
        self._logger = base_logger

    def debug(self, msg: str, *args, **kwargs) -> None:
        """Log debug message with indentation"""
        self._logger.debug(f"{self.indent}{msg}", *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        """Log info message with indentation"""
        self._logger.info(f"{self.indent}{msg}", *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        """Log warning message with indentation"""
        self._logger.warning(f"{self.indent}{msg}", *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        """Log error message with indentation"""
        self._logger.error(f"{self.indent}{msg}", *args, **kwargs)

    @property
    def level(self) -> int:
        """Current indentation level"""
        return _indent_level.get()

    @property
    def indent(self) -> str:
        """Get current indentation string with tree characters"""
        level = _indent_level.get()
        if level == 0:
            return ""
        return _TREE_CHARS["pipe"] * (level - 1) + _TREE_CHARS["branch"]

    @contextmanager
    def indent_block(self, initial_message: str | None = None):
        """
        Context manager for handling indentation blocks

        Args:
            initial_message: Optional message to log at block start
        """
        if initial_message:
            self.debug(initial_message)
        token = _indent_level.set(_indent_level.get() + 1)
        try:
            yield
        finally:
            _indent_level.reset(token)

    @contextmanager
    def at_level(self, level: int):
        """Temporarily set the indentation to an absolute level"""
        token = _indent_level.set(max(level, 0))
        try:
            yield
        finally:
            _indent_level.reset(token)


def setup_logging(level=logging.INFO):
    """
    Configure logging for the converter

    Args:
        level: Logging level (default: INFO)

    Returns:
        IndentLogger: Configured logger with indentation support
    """
    base_logger = logging.getLogger("lawtree")
    base_logger.setLevel(level)

    # Remove existing handlers
    base_logger.handlers = []

    # Log to stderr so JSON written to stdout stays clean
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter("%(levelname)8s %(message)s")
    handler.setFormatter(formatter)

    base_logger.addHandler(handler)

    return IndentLogger(base_logger)


# Default logger with indentation support
logger = IndentLogger(logging.getLogger("lawtree"))
