"""Settings store: persisted option values, keyed by bare option id."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from configpanel.exceptions import SettingsLoadError
from configpanel.utils.logging_config import get_logger

logger = get_logger(__name__)


def load_saved_settings(path: str | Path) -> dict[str, Any]:
    """Load the flat option id → value map.

    No cross-validation against a schema happens here; unknown keys are kept
    and simply never looked up.

    Args:
        path: Path to the YAML settings document

    Returns:
        Saved values, empty if the file does not exist

    Raises:
        SettingsLoadError: If the file exists but cannot be read or parsed

    """
    path = Path(path)
    if not path.is_file():
        logger.debug("No saved settings at %s", path)
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        msg = f"Failed to read saved settings {path}: {e}"
        raise SettingsLoadError(msg, {"path": str(path)}) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Saved settings {path} is not a mapping"
        raise SettingsLoadError(msg, {"path": str(path), "type": type(data).__name__})

    logger.debug("Loaded %d saved settings from %s", len(data), path)
    return {str(key): value for key, value in data.items()}
