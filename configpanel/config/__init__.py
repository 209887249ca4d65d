"""Configuration management.

This module handles loading and validation of the engine configuration.
"""

from __future__ import annotations

from configpanel.config.config import ConfigManager

__all__ = [
    "ConfigManager",
]
