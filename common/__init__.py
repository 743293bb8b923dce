"""Common utilities for the Luma TUI runtime."""

from common.config import RuntimeConfig
from common.logging_setup import setup_logging, get_logger

__all__ = ["RuntimeConfig", "setup_logging", "get_logger"]
