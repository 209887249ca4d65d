"""Config panel engine: schema loading, addressing and rendering.

A config panel is a TOML schema of panels holding sections holding options,
merged at render time with a flat YAML document of saved option values.
"""

from __future__ import annotations

from configpanel.panel.addressing import ExcludeKey, FilterKey, KeyKind
from configpanel.panel.panel import ConfigPanel
from configpanel.panel.settings import SettingsConfigPanel

__all__ = [
    "ConfigPanel",
    "ExcludeKey",
    "FilterKey",
    "KeyKind",
    "SettingsConfigPanel",
]
