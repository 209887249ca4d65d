"""Verbosity management for the configpanel CLI.

Maps the -v, -vv, -vvv flags to logging levels.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from configpanel.models import LogLevel


class VerbosityLevel(IntEnum):
    """Verbosity levels for CLI commands."""

    NORMAL = 0  # Configured log level
    VERBOSE = 1  # -v: info messages
    DEBUG = 2  # -vv: debug messages
    TRACE = 3  # -vvv: debug messages and tracebacks on errors


class VerbosityManager:
    """Maps a count of -v flags to a logging level."""

    LEVEL_TO_LOGGING: dict[VerbosityLevel, int] = {
        VerbosityLevel.NORMAL: logging.WARNING,
        VerbosityLevel.VERBOSE: logging.INFO,
        VerbosityLevel.DEBUG: logging.DEBUG,
        VerbosityLevel.TRACE: logging.DEBUG,
    }

    def __init__(self, verbosity_count: int = 0):
        """Initialize verbosity manager.

        Args:
            verbosity_count: Number of -v flags, clamped to 0-3

        """
        self.verbosity_count = max(0, min(3, verbosity_count))
        self.level = VerbosityLevel(self.verbosity_count)
        self.logging_level = self.LEVEL_TO_LOGGING[self.level]

    @classmethod
    def from_count(cls, count: int) -> VerbosityManager:
        """Create VerbosityManager from count."""
        return cls(count)

    def is_verbose(self) -> bool:
        """Check if verbose mode is enabled."""
        return self.level >= VerbosityLevel.VERBOSE

    def is_debug(self) -> bool:
        """Check if debug mode is enabled."""
        return self.level >= VerbosityLevel.DEBUG

    def should_show_stack_trace(self) -> bool:
        """Check if tracebacks should be printed on errors."""
        return self.level == VerbosityLevel.TRACE

    def log_level(self, configured: LogLevel) -> LogLevel:
        """Log level to use given the one from configuration.

        Without -v flags the configured level is kept.
        """
        if self.is_debug():
            return LogLevel.DEBUG
        if self.is_verbose():
            return LogLevel.INFO
        return configured
