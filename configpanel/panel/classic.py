"""Classic view: flat ``panel.section.option -> {ask, value}`` map.

Values are humanized for display. Allowed-empty options carry their label
only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from configpanel.models import ALLOWED_EMPTY_TYPES
from configpanel.panel import option_types
from configpanel.panel.labels import resolve_ask
from configpanel.panel.walk import value_or_default, walk

if TYPE_CHECKING:
    from configpanel.i18n.translator import BaseTranslator
    from configpanel.models import Container
    from configpanel.panel.addressing import ExcludeKey, FilterKey


def render_classic(
    container: Container,
    saved: dict[str, Any],
    filter_key: FilterKey,
    exclude_key: ExcludeKey,
    translator: BaseTranslator,
) -> dict[str, dict[str, str]]:
    """Render the selected options as a compact labeled map.

    Raises:
        UnknownOptionTypeError: If an option has an unknown type tag
        ValueNotSetError: If a valued option has no saved value nor default
        MissingLabelError: If an option has no resolvable ``ask``

    """
    result: dict[str, dict[str, str]] = {}
    for panel_id, section_id, option_id, option in walk(
        container, filter_key, exclude_key
    ):
        option_type = option_types.parse_option_type(option_id, option)
        entry = {
            "ask": resolve_ask(option_id, option, container.i18n_key, translator)
        }
        if option_type not in ALLOWED_EMPTY_TYPES:
            value = value_or_default(option_id, option, saved)
            entry["value"] = option_types.humanize(option_type, value)
        result[f"{panel_id}.{section_id}.{option_id}"] = entry
    return result
