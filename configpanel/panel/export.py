"""Export view: flat ``option_id -> value`` map without labels."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from configpanel.models import ALLOWED_EMPTY_TYPES, ReleaseVariant
from configpanel.panel import option_types
from configpanel.panel.walk import value_or_default, walk

if TYPE_CHECKING:
    from configpanel.models import Container
    from configpanel.panel.addressing import ExcludeKey, FilterKey


def render_export(
    container: Container,
    saved: dict[str, Any],
    filter_key: FilterKey,
    exclude_key: ExcludeKey,
    release: ReleaseVariant,
) -> dict[str, Any]:
    """Render the selected options as a machine-readable map.

    Bullseye exports the effective value as stored; bookworm exports its
    normalized form. Allowed-empty options are exported as None.
    """
    result: dict[str, Any] = {}
    for _panel_id, _section_id, option_id, option in walk(
        container, filter_key, exclude_key
    ):
        option_type = option_types.parse_option_type(option_id, option)
        if option_type in ALLOWED_EMPTY_TYPES:
            result[option_id] = None
            continue

        value = value_or_default(option_id, option, saved)
        if release is ReleaseVariant.BOOKWORM:
            value = option_types.normalize(option_type, value, release)
        result[option_id] = value
    return result
