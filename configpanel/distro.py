"""Platform release detection."""

from __future__ import annotations

from pathlib import Path

from configpanel.exceptions import UnsupportedReleaseError
from configpanel.models import ReleaseVariant
from configpanel.utils.logging_config import get_logger

OS_RELEASE_PATH = "/etc/os-release"

logger = get_logger(__name__)


def current_release(os_release_path: str | Path = OS_RELEASE_PATH) -> ReleaseVariant:
    """Detect the platform release from an os-release file.

    Args:
        os_release_path: Path to the os-release file

    Returns:
        Detected release variant

    Raises:
        UnsupportedReleaseError: If the file is unreadable, has no VERSION_ID,
            or names an unsupported release

    """
    path = Path(os_release_path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Failed to read {path}: {e}"
        raise UnsupportedReleaseError(msg, {"path": str(path)}) from e

    for line in content.splitlines():
        if line.startswith("VERSION_ID="):
            version_id = line[len("VERSION_ID=") :].strip().strip('"')
            release = ReleaseVariant.parse(version_id)
            logger.debug("Detected platform release %s from %s", release.value, path)
            return release

    msg = f"Malformed {path}: missing VERSION_ID"
    raise UnsupportedReleaseError(msg, {"path": str(path)})
