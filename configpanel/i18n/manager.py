"""Translation manager with configuration integration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from configpanel.i18n import DEFAULT_LOCALE, get_system_locale
from configpanel.i18n.translator import Translator
from configpanel.utils.logging_config import get_logger

if TYPE_CHECKING:
    from configpanel.models import EngineConfig

logger = get_logger(__name__)


class TranslationManager:
    """Builds the label translator from engine configuration."""

    def __init__(self, config: EngineConfig) -> None:
        """Initialize translation manager.

        Args:
            config: Engine configuration providing locale and locales directory

        """
        self.config = config
        self.locale = self._initialize_locale()
        self._translator: Translator | None = None

    def _initialize_locale(self) -> str:
        """Pick the locale.

        Precedence order:
        1. Config file (i18n.locale)
        2. Environment variables (CONFIGPANEL_LOCALE, LC_ALL, LANG)
        3. Default locale ('en')

        """
        if self.config.i18n.locale:
            logger.debug("Locale set from config: %s", self.config.i18n.locale)
            return self.config.i18n.locale

        final_locale = get_system_locale() or DEFAULT_LOCALE
        logger.debug("Using locale: %s", final_locale)
        return final_locale

    @property
    def translator(self) -> Translator:
        """Translator for the configured locales directory, created on first use."""
        if self._translator is None:
            self._translator = Translator(self.config.paths.locales_dir, self.locale)
            if self.locale not in self._translator.available_locales:
                logger.warning(
                    "Locale '%s' is not available in %s, falling back to '%s'",
                    self.locale,
                    self.config.paths.locales_dir,
                    DEFAULT_LOCALE,
                )
        return self._translator
