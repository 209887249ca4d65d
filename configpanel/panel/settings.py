"""Config panel of the global settings entity."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from configpanel.i18n.manager import TranslationManager
from configpanel.legacy import translate_legacy_setting
from configpanel.models import GetMode
from configpanel.panel.addressing import FilterKey
from configpanel.panel.panel import ConfigPanel
from configpanel.utils.logging_config import get_logger

if TYPE_CHECKING:
    from configpanel.config.config import ConfigManager
    from configpanel.i18n.translator import BaseTranslator
    from configpanel.models import ReleaseVariant

logger = get_logger(__name__)

SETTINGS_ENTITY = "settings"
SETTINGS_SCHEMA_ENTITY = "global"


def _string_to_bool(value: Any) -> Any:
    """Turn the stored strings "True" and "False" into booleans."""
    if value == "True":
        return True
    if value == "False":
        return False
    return value


class SettingsConfigPanel(ConfigPanel):
    """The ``settings`` entity, backed by ``config_global.toml``."""

    def __init__(
        self,
        config_manager: ConfigManager,
        translator: BaseTranslator | None = None,
        release: ReleaseVariant | None = None,
    ) -> None:
        """Initialize the settings panel from engine configuration.

        Args:
            config_manager: Engine configuration
            translator: Label translator, built from the configuration if None
            release: Release variant, taken from the configuration if None

        """
        if translator is None:
            translator = TranslationManager(config_manager.config).translator
        if release is None:
            release = config_manager.release()
        super().__init__(
            SETTINGS_ENTITY,
            config_manager.schema_path(SETTINGS_SCHEMA_ENTITY),
            config_manager.config.paths.settings_path,
            translator,
            release,
        )

    def get_setting(self, key: str, mode: GetMode) -> Any:
        """Get a setting by its dotted key.

        Legacy setting names are accepted. Outside of full mode, the stored
        strings "True" and "False" come back as booleans.

        Raises:
            AddressingError: If the key cannot be parsed
            ConfigPanelError: For any load or render failure

        """
        translated = translate_legacy_setting(key)
        if translated != key:
            logger.debug("Legacy setting '%s' is now '%s'", key, translated)

        result = self.get(FilterKey.parse(translated), mode)
        if mode is GetMode.FULL:
            return result
        return _string_to_bool(result)
