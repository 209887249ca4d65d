"""Schema loader and version gate.

A schema document is a TOML tree::

    version = "1.0"
    i18n = "global_settings_setting"

    [security]
    name = "Security"

        [security.webadmin]
        name = "Webadmin"

            [security.webadmin.webadmin_allowlist_enabled]
            type = "boolean"
            default = false

At the root, panel and section levels a table-valued key that is not one of
the level's known properties is a child node; everything else is a property
of the node itself.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
from pydantic import ValidationError

from configpanel.exceptions import (
    MissingOptionIdError,
    MissingOptionTypeError,
    MissingVersionError,
    ReservedKeywordError,
    SchemaParseError,
    SchemaReadError,
    UnsupportedVersionError,
)
from configpanel.models import (
    SUPPORTED_VERSION,
    Container,
    OptionSchema,
    Panel,
    Section,
)
from configpanel.utils.logging_config import get_logger

logger = get_logger(__name__)

ROOT_PROPERTIES = ("version", "i18n")
PANEL_PROPERTIES = ("name", "services", "actions", "help", "bind")
SECTION_PROPERTIES = ("name", "services", "optional", "help", "visible", "bind")

# Option ids that would clash with attributes the platform attaches to options
RESERVED_KEYWORDS = frozenset(
    {
        "old",
        "app",
        "changed",
        "file_hash",
        "binds",
        "types",
        "formats",
        "getter",
        "setter",
        "short_setting",
        "type",
        "bind",
        "nothing_changed",
        "changes_validated",
        "result",
        "max_progression",
        "properties",
        "default",
        "defaults",
    }
)


def check_version(raw: dict[str, Any], path: Path | str = "<string>") -> str:
    """Reject any schema whose version is not the supported one.

    Both ``version = 1.0`` and ``version = "1.0"`` are accepted.

    Raises:
        MissingVersionError: If there is no version key
        UnsupportedVersionError: For any other version value

    """
    if "version" not in raw:
        msg = f"Config panel {path} has no version"
        raise MissingVersionError(msg, {"path": str(path)})

    version = raw["version"]
    if isinstance(version, float) and version == 1.0:
        return SUPPORTED_VERSION
    if isinstance(version, str) and version == SUPPORTED_VERSION:
        return SUPPORTED_VERSION
    raise UnsupportedVersionError(version, {"path": str(path)})


def _split_node(
    raw: dict[str, Any], properties: tuple[str, ...], where: str
) -> tuple[dict[str, Any], dict[str, dict[str, Any]]]:
    """Separate the properties of a node from its children."""
    props: dict[str, Any] = {}
    children: dict[str, dict[str, Any]] = {}
    for key, value in raw.items():
        # A table with a type is an option even if its id is a property name
        if isinstance(value, dict) and (key not in properties or "type" in value):
            children[key] = value
            continue
        if key not in properties:
            logger.warning("Unknown key '%s' found in config panel at %s", key, where)
        props[key] = value
    return props, children


def _build_option(option_id: str, raw: dict[str, Any], where: str) -> OptionSchema:
    if not option_id:
        msg = f"Option without id in {where}"
        raise MissingOptionIdError(msg, {"location": where})
    if option_id in RESERVED_KEYWORDS:
        raise ReservedKeywordError(option_id, {"location": where})
    if "type" not in raw:
        msg = f"Option '{option_id}' in {where} has no type"
        raise MissingOptionTypeError(msg, {"option_id": option_id})

    fields = {
        k: v for k, v in raw.items() if k not in ("type", "default", "optional")
    }
    return OptionSchema(
        type=str(raw["type"]),
        default=raw.get("default"),
        optional=raw.get("optional"),
        extra_fields=fields,
    )


def _build_section(section_id: str, raw: dict[str, Any], where: str) -> Section:
    props, children = _split_node(raw, SECTION_PROPERTIES, where)
    options = {
        option_id: _build_option(option_id, option, f"{where}.{option_id}")
        for option_id, option in children.items()
    }
    name = props.pop("name", "")
    optional = props.pop("optional", True)
    return Section(name=name, optional=optional, options=options, extra_fields=props)


def _build_panel(panel_id: str, raw: dict[str, Any]) -> Panel:
    props, children = _split_node(raw, PANEL_PROPERTIES, panel_id)
    sections = {
        section_id: _build_section(section_id, section, f"{panel_id}.{section_id}")
        for section_id, section in children.items()
    }
    # Panels without a name are labeled after their capitalized id
    name = props.pop("name", panel_id.capitalize())
    return Panel(name=name, sections=sections, extra_fields=props)


def build_container(raw: dict[str, Any], path: Path | str = "<string>") -> Container:
    """Build a container from an already-parsed schema document.

    The version is checked before any panel is looked at.
    """
    version = check_version(raw, path)

    i18n_key = raw.get("i18n")
    if i18n_key is not None and not isinstance(i18n_key, str):
        msg = f"Config panel {path} has a non-string i18n key"
        raise SchemaParseError(msg, {"i18n": i18n_key})

    _props, children = _split_node(raw, ROOT_PROPERTIES, str(path))
    try:
        panels = {
            panel_id: _build_panel(panel_id, panel)
            for panel_id, panel in children.items()
        }
        return Container(version=version, i18n_key=i18n_key, panels=panels)
    except ValidationError as e:
        msg = f"Malformed config panel {path}: {e}"
        raise SchemaParseError(msg) from e


def load_container(path: str | Path) -> Container:
    """Read and validate a schema document.

    Args:
        path: Path to the TOML schema document

    Returns:
        The loaded container

    Raises:
        SchemaReadError: If the file cannot be read
        SchemaParseError: If the file is not valid TOML or is malformed
        MissingVersionError: If the schema has no version
        UnsupportedVersionError: If the schema version is not supported
        ReservedKeywordError: If an option id is a reserved keyword

    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Failed to read config panel {path}: {e}"
        raise SchemaReadError(msg, {"path": str(path)}) from e

    try:
        raw = toml.loads(content)
    except toml.TomlDecodeError as e:
        msg = f"Config panel {path} is not valid TOML: {e}"
        raise SchemaParseError(msg, {"path": str(path)}) from e

    container = build_container(raw, path)
    logger.debug(
        "Loaded config panel %s (version %s, %d panels)",
        path,
        container.version,
        len(container.panels),
    )
    return container
