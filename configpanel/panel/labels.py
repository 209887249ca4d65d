"""Label resolution for ``ask``, ``help`` and node names.

A label field of an option is resolved by, in order:

1. an inline per-locale table on the option, e.g. ``ask.en = "Port"``;
2. the platform translation ``{i18n_key}_{option_id}`` (``..._help`` for help);
3. the raw field, if it is a plain string.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from configpanel.exceptions import MissingLabelError
from configpanel.i18n import value_for_locale

if TYPE_CHECKING:
    from configpanel.i18n.translator import BaseTranslator
    from configpanel.models import OptionSchema


def option_i18n_key(
    container_i18n_key: str | None, option_id: str, suffix: str = ""
) -> str | None:
    """Translation key of an option label, if the container has a prefix."""
    if container_i18n_key is None:
        return None
    return f"{container_i18n_key}_{option_id}{suffix}"


def resolve_label(
    field: str,
    option: OptionSchema,
    i18n_key: str | None,
    translator: BaseTranslator,
) -> str | None:
    """Resolve a label field, or None if nothing yields a string."""
    raw = option.extra_fields.get(field)
    if isinstance(raw, dict):
        return value_for_locale(raw, translator.locale)
    if i18n_key is not None and translator.key_exists(i18n_key):
        return translator.translate_no_context(i18n_key)
    if isinstance(raw, str):
        return raw
    return None


def resolve_ask(
    option_id: str,
    option: OptionSchema,
    container_i18n_key: str | None,
    translator: BaseTranslator,
) -> str:
    """Resolve the mandatory ``ask`` label of an option.

    Raises:
        MissingLabelError: If no source yields a string

    """
    ask = resolve_label(
        "ask", option, option_i18n_key(container_i18n_key, option_id), translator
    )
    if ask is None:
        raise MissingLabelError(option_id, "ask")
    return ask


def resolve_help(
    option_id: str,
    option: OptionSchema,
    container_i18n_key: str | None,
    translator: BaseTranslator,
) -> str | None:
    """Resolve the optional ``help`` label of an option."""
    return resolve_label(
        "help",
        option,
        option_i18n_key(container_i18n_key, option_id, "_help"),
        translator,
    )


def resolve_name(name: Any, translator: BaseTranslator) -> str:
    """Resolve a panel or section name, which may be a per-locale table."""
    if isinstance(name, dict):
        return value_for_locale(name, translator.locale)
    return str(name)
