"""Full view: nested panel/section/option tree for the admin UI.

The two release variants differ only in the shape of the emitted nodes, so
each node kind has one builder per variant, defined side by side below.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from configpanel.models import ALLOWED_EMPTY_TYPES, OptionType, ReleaseVariant
from configpanel.panel import option_types
from configpanel.panel.labels import resolve_ask, resolve_help, resolve_name
from configpanel.panel.walk import (
    selected_options,
    selected_panels,
    selected_sections,
    value_or_default,
)

if TYPE_CHECKING:
    from configpanel.i18n.translator import BaseTranslator
    from configpanel.models import Container, OptionSchema, Panel, Section
    from configpanel.panel.addressing import ExcludeKey, FilterKey

DEFAULT_ACTIONS = {"apply": {"en": "Apply"}}
PANEL_MODE = "bash"


def _variant_name(
    name: str | dict[str, str], translator: BaseTranslator, release: ReleaseVariant
) -> Any:
    # Bullseye names are always per-locale tables
    if release is ReleaseVariant.BULLSEYE:
        if isinstance(name, dict):
            return dict(name)
        return {"en": name}
    return resolve_name(name, translator)


def _fields(
    option_id: str,
    option: OptionSchema,
    option_type: OptionType,
    release: ReleaseVariant,
) -> dict[str, Any]:
    """Type-synthesized fields, overridden by the fields of the schema."""
    handler = option_types.handler_for(option_type)
    fields = handler.full_extra_fields(option_id, release)
    fields.update(option.extra_fields)
    return fields


def _bookworm_option(
    option_id: str,
    option: OptionSchema,
    option_type: OptionType,
    ask: str,
    help_text: str | None,
    saved: dict[str, Any],
) -> dict[str, Any]:
    release = ReleaseVariant.BOOKWORM
    fields = _fields(option_id, option, option_type, release)
    node = dict(fields)
    node["ask"] = ask

    if option_type in ALLOWED_EMPTY_TYPES:
        node["id"] = option_id
        node["readonly"] = True
        node["type"] = option.option_type
        node["visible"] = True
        node["mode"] = PANEL_MODE
        return node

    if help_text is not None:
        node["help"] = help_text if help_text != "" else {}
    node["id"] = option_id
    node["optional"] = option.is_optional
    value = value_or_default(option_id, option, saved)
    node["value"] = option_types.normalize(option_type, value, release)
    if option.default is not None and option.default != "":
        node["default"] = option.default
    node["type"] = option.option_type
    node["visible"] = option.extra_fields.get("visible", True)
    redact = fields.get("redact")
    node["redact"] = redact if isinstance(redact, bool) else False
    node["readonly"] = False
    node["mode"] = PANEL_MODE
    return node


def _bullseye_option(
    option_id: str,
    option: OptionSchema,
    option_type: OptionType,
    ask: str,
    help_text: str | None,
    saved: dict[str, Any],
) -> dict[str, Any]:
    fields = _fields(option_id, option, option_type, ReleaseVariant.BULLSEYE)
    node = dict(fields)
    node["ask"] = ask

    if option_type in ALLOWED_EMPTY_TYPES:
        node["id"] = option_id
        node["name"] = option_id
        node["optional"] = option.is_optional
        node["type"] = option.option_type
        return node

    if help_text is not None:
        node["help"] = help_text if help_text != "" else {"en": ""}
    node["id"] = option_id
    node["name"] = option_id
    node["optional"] = option.is_optional
    node["current_value"] = value_or_default(option_id, option, saved)
    if option.default is not None:
        node["default"] = None if option.default == "" else option.default
    node["type"] = option.option_type
    node["pattern"] = None
    return node


def _section_node(
    section_id: str,
    section: Section,
    options: list[dict[str, Any]],
    translator: BaseTranslator,
    release: ReleaseVariant,
) -> dict[str, Any]:
    node: dict[str, Any] = {
        "id": section_id,
        "is_action_section": False,
        "optional": section.optional,
        "name": _variant_name(section.name, translator, release),
        "services": [],
        "options": options,
    }
    if release is ReleaseVariant.BOOKWORM:
        node["visible"] = True
    return node


def _panel_node(
    panel_id: str,
    panel: Panel,
    sections: list[dict[str, Any]],
    translator: BaseTranslator,
    release: ReleaseVariant,
) -> dict[str, Any]:
    return {
        "actions": copy.deepcopy(DEFAULT_ACTIONS),
        "id": panel_id,
        "name": _variant_name(panel.name, translator, release),
        "sections": sections,
        "services": [],
    }


def blank_root_access_passwords(tree: dict[str, Any]) -> None:
    """Blank password values in ``security.root_access`` to an empty string.

    Applied to bookworm renders only.
    """
    for panel in tree["panels"]:
        if panel["id"] != "security":
            continue
        for section in panel["sections"]:
            if section["id"] != "root_access":
                continue
            for option in section["options"]:
                is_password = option.get("type") == OptionType.PASSWORD.value
                if is_password and "value" in option:
                    option["value"] = ""


def render_full(
    container: Container,
    saved: dict[str, Any],
    filter_key: FilterKey,
    exclude_key: ExcludeKey,
    translator: BaseTranslator,
    release: ReleaseVariant,
) -> dict[str, Any]:
    """Render the selected part of the schema as a UI tree.

    Args:
        container: Loaded schema
        saved: Saved option values
        filter_key: Part of the schema to render
        exclude_key: Part of the schema to leave out
        translator: Label translator
        release: Platform release variant shaping the output

    Returns:
        ``{version, i18n, panels}`` tree

    Raises:
        UnknownOptionTypeError: If an option has an unknown type tag
        ValueNotSetError: If a valued option has no saved value nor default
        MissingLabelError: If an option has no resolvable ``ask``
        OptionValueError: If a value cannot be normalized

    """
    build_option = (
        _bookworm_option if release is ReleaseVariant.BOOKWORM else _bullseye_option
    )

    panels = []
    for panel_id, panel in selected_panels(container, filter_key, exclude_key):
        sections = []
        for section_id, section in selected_sections(
            panel_id, panel, filter_key, exclude_key
        ):
            options = []
            for option_id, option in selected_options(
                panel_id, section_id, section, filter_key, exclude_key
            ):
                option_type = option_types.parse_option_type(option_id, option)
                ask = resolve_ask(option_id, option, container.i18n_key, translator)
                help_text = resolve_help(
                    option_id, option, container.i18n_key, translator
                )
                options.append(
                    build_option(option_id, option, option_type, ask, help_text, saved)
                )
            sections.append(
                _section_node(section_id, section, options, translator, release)
            )
        panels.append(_panel_node(panel_id, panel, sections, translator, release))

    tree: dict[str, Any] = {
        "version": 1 if release is ReleaseVariant.BOOKWORM else 1.0,
        "i18n": container.i18n_key,
        "panels": panels,
    }
    if release is ReleaseVariant.BOOKWORM:
        blank_root_access_passwords(tree)
    return tree
