"""snaprotate Logging Module

This module provides centralized logging configuration for snaprotate.
Console output goes to standard output; an optional rotating log file can be
written next to it.
"""

from .logger_setup import LoggerConfigError, LoggingConfig, configure_logging

__all__ = ["LoggerConfigError", "LoggingConfig", "configure_logging"]
