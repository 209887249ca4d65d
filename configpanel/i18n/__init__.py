"""Internationalization (i18n) support for configpanel.

Two kinds of strings are translated:

- CLI messages, through gettext and the ``_`` helper below;
- schema labels, through a :class:`~configpanel.i18n.translator.Translator`
  reading the platform's JSON locale files, or through inline per-locale
  tables resolved with :func:`value_for_locale`.
"""

from __future__ import annotations

import gettext
import os
from pathlib import Path
from typing import Any

from configpanel.utils.logging_config import get_logger

# Default locale
DEFAULT_LOCALE = "en"

# Translation instance (lazy-loaded)
_translation: gettext.NullTranslations | None = None

logger = get_logger(__name__)


def get_system_locale() -> str | None:
    """Get the two-letter locale from the environment.

    Precedence order:
    1. CONFIGPANEL_LOCALE environment variable
    2. LC_ALL environment variable
    3. LANG environment variable

    Returns:
        Locale code (e.g., 'en', 'fr') or None if nothing is set

    """
    env_locale = (
        os.environ.get("CONFIGPANEL_LOCALE")
        or os.environ.get("LC_ALL")
        or os.environ.get("LANG")
    )
    if not env_locale or env_locale in ("C", "POSIX"):
        return None
    return env_locale[:2].lower()


def _get_translation() -> gettext.NullTranslations:
    """Get or create the gettext translation instance for CLI messages."""
    global _translation

    if _translation is None:
        locale_code = get_system_locale() or DEFAULT_LOCALE
        locale_dir = Path(__file__).parent / "locales"
        _translation = gettext.translation(
            "configpanel",
            localedir=str(locale_dir),
            languages=[locale_code],
            fallback=True,
        )
        logger.debug("CLI messages use locale %s", locale_code)

    return _translation


def _(message: str) -> str:
    """Translate a CLI message.

    Args:
        message: Message to translate

    Returns:
        Translated message (or original if translation not found)

    """
    return _get_translation().gettext(message)


def value_for_locale(table: dict[str, Any], locale: str) -> str:
    """Pick the best entry of an inline per-locale table.

    Fallback order: the requested locale, then the default locale, then the
    first entry of the table.

    Args:
        table: Mapping of locale code to text, e.g. ``{"en": "Port", "fr": "Port"}``
        locale: Current locale code

    Returns:
        Selected text, or an empty string for an empty table

    """
    if locale in table:
        return str(table[locale])
    if DEFAULT_LOCALE in table:
        return str(table[DEFAULT_LOCALE])
    for value in table.values():
        return str(value)
    return ""
