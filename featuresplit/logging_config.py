"""
Logging configuration for featuresplit

Includes IndentLogger for tree-style output while walking files and scenarios.
"""

import logging
import sys
from contextlib import contextmanager

LOGGER_NAME = "featuresplit"


class GlobalIndent:
    """Global indentation level for hierarchical logging"""

    _level = 0
    _step = "    "
    _leaf = "└── "

    @classmethod
    def increase(cls) -> None:
        """Increase indentation level"""
        cls._level += 1

    @classmethod
    def decrease(cls) -> None:
        """Decrease indentation level"""
        if cls._level > 0:
            cls._level -= 1

    @classmethod
    def reset(cls) -> None:
        """Reset indentation state (useful for tests)"""
        cls._level = 0

    @classmethod
    def get_indent(cls) -> str:
        """Get current indentation string"""
        if cls._level == 0:
            return ""
        return cls._step * (cls._level - 1) + cls._leaf


class IndentLogger:
    """Logger wrapper that handles indentation using global state"""

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
    def indent(self) -> str:
        """Get current indentation string"""
        return GlobalIndent.get_indent()

    @contextmanager
    def indent_block(self, initial_message: str | None = None):
        """
        Context manager for handling indentation blocks

        Args:
            initial_message: Optional message to log at block start
        """
        if initial_message:
            self.debug(initial_message)
        GlobalIndent.increase()
        try:
            yield
        finally:
            GlobalIndent.decrease()


def setup_logging(level=logging.INFO):
    """
    Configure logging for featuresplit

    Args:
        level: Logging level (default: INFO)

    Returns:
        IndentLogger: Configured logger with indentation support
    """
    base_logger = logging.getLogger(LOGGER_NAME)
    base_logger.setLevel(level)

    # Remove existing handlers
    base_logger.handlers = []

    # Diagnostics go to stderr; stdout is left to the CLI summary
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter("%(levelname)8s %(message)s")
    handler.setFormatter(formatter)

    base_logger.addHandler(handler)

    return IndentLogger(base_logger)


# Default logger with indentation support
logger = IndentLogger(logging.getLogger(LOGGER_NAME))
