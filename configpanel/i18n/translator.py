"""Translators for schema labels.

Platform translations live in one JSON file per locale (``en.json``,
``fr.json``...) mapping translation keys to strings. Only the default, the
fallback and the requested locale are read up front; the others are read on
first use.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from configpanel.exceptions import (
    LocalesReadError,
    MissingTranslationKeyError,
    TranslationFormatError,
)
from configpanel.i18n import DEFAULT_LOCALE
from configpanel.utils.logging_config import get_logger

logger = get_logger(__name__)


class BaseTranslator(ABC):
    """Interface consumed by the config panel renderers."""

    @property
    @abstractmethod
    def locale(self) -> str:
        """Currently selected locale code."""

    @abstractmethod
    def set_locale(self, locale: str) -> None:
        """Select another locale."""

    @abstractmethod
    def key_exists(self, key: str) -> bool:
        """Whether the key exists in the default locale."""

    @abstractmethod
    def translate_no_context(self, key: str) -> str:
        """Translate a key without placeholder substitution."""

    def translate_with_context(self, key: str, params: dict[str, Any]) -> str:
        """Translate a key and substitute ``{name}`` placeholders."""
        raw = self.translate_no_context(key)
        try:
            return raw.format(**params)
        except (KeyError, IndexError, ValueError) as e:
            msg = f"Failed to format locale {self.locale} translation key {key}"
            raise TranslationFormatError(
                msg, {"key": key, "params": params, "error": str(e)}
            ) from e


class Translator(BaseTranslator):
    """Translator backed by a directory of JSON locale files."""

    def __init__(self, locales_dir: str | Path, locale: str = DEFAULT_LOCALE):
        """Index the locale directory.

        Args:
            locales_dir: Directory containing ``<locale>.json`` files
            locale: Locale to select

        Raises:
            LocalesReadError: If the directory or an eagerly-read file is unreadable

        """
        self.locales_dir = Path(locales_dir)
        self._locale = locale
        self._paths: dict[str, Path] = {}
        self._loaded: dict[str, dict[str, str]] = {}

        try:
            entries = sorted(self.locales_dir.iterdir())
        except OSError as e:
            msg = f"Failed to read the locales from {self.locales_dir}"
            raise LocalesReadError(msg, {"error": str(e)}) from e

        for path in entries:
            if path.suffix != ".json":
                continue
            self._paths[path.stem] = path

        for name in {DEFAULT_LOCALE, locale}:
            if name in self._paths:
                self._load(name)

        logger.debug(
            "Indexed %d locales in %s (selected: %s)",
            len(self._paths),
            self.locales_dir,
            locale,
        )

    def _load(self, name: str) -> dict[str, str]:
        """Read a locale file, once."""
        if name not in self._loaded:
            path = self._paths[name]
            try:
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                msg = f"Failed to read the locales from {path}"
                raise LocalesReadError(msg, {"error": str(e)}) from e
            if not isinstance(data, dict):
                msg = f"Locale file {path} is not a JSON object"
                raise LocalesReadError(msg)
            self._loaded[name] = {str(k): str(v) for k, v in data.items()}
        return self._loaded[name]

    @property
    def locale(self) -> str:
        """Currently selected locale code."""
        return self._locale

    @property
    def available_locales(self) -> list[str]:
        """Locale codes found in the locale directory."""
        return list(self._paths)

    def set_locale(self, locale: str) -> None:
        """Select another locale."""
        self._locale = locale

    def key_exists(self, key: str) -> bool:
        """Whether the key exists in the default locale."""
        if DEFAULT_LOCALE not in self._paths:
            return False
        return key in self._load(DEFAULT_LOCALE)

    def translate_no_context(self, key: str) -> str:
        """Translate a key in the current locale, falling back to the default one."""
        if self._locale in self._paths:
            current = self._load(self._locale)
            if key in current:
                return current[key]

        if DEFAULT_LOCALE in self._paths:
            fallback = self._load(DEFAULT_LOCALE)
            if key in fallback:
                return fallback[key]

        raise MissingTranslationKeyError(key, self._locale)


class MockedTranslator(BaseTranslator):
    """Translator where every key exists and translates to itself."""

    @property
    def locale(self) -> str:
        """Always the default locale."""
        return DEFAULT_LOCALE

    def set_locale(self, locale: str) -> None:
        """Locale changes are ignored."""

    def key_exists(self, key: str) -> bool:
        """Every key exists."""
        return True

    def translate_no_context(self, key: str) -> str:
        """Return the key itself."""
        return key

    def translate_with_context(self, key: str, params: dict[str, Any]) -> str:
        """Return the key itself, ignoring parameters."""
        return key
