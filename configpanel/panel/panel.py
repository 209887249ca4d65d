"""Config panel of one entity: schema plus saved settings, rendered on demand."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from configpanel.exceptions import FilterKeyNotFoundError
from configpanel.models import ALLOWED_EMPTY_TYPES, GetMode
from configpanel.panel import option_types
from configpanel.panel.addressing import ExcludeKey, FilterKey, KeyKind
from configpanel.panel.classic import render_classic
from configpanel.panel.export import render_export
from configpanel.panel.full import render_full
from configpanel.panel.loader import load_container
from configpanel.panel.saved_settings import load_saved_settings
from configpanel.panel.walk import value_or_default
from configpanel.utils.logging_config import get_logger

if TYPE_CHECKING:
    from configpanel.i18n.translator import BaseTranslator
    from configpanel.models import Container, OptionSchema, ReleaseVariant

logger = get_logger(__name__)


class ConfigPanel:
    """Read side of a config panel.

    The schema and the saved settings are read again by every get or list,
    so a render reflects both documents as they were when it started.
    """

    def __init__(
        self,
        entity: str,
        schema_path: str | Path,
        settings_path: str | Path,
        translator: BaseTranslator,
        release: ReleaseVariant,
    ) -> None:
        """Initialize config panel.

        Args:
            entity: Entity name used in error messages (e.g. "settings")
            schema_path: Path to the TOML schema document
            settings_path: Path to the YAML saved settings
            translator: Label translator
            release: Platform release variant shaping Export and Full renders

        Raises:
            SchemaLoadError: If the schema cannot be loaded

        """
        self.entity = entity
        self.schema_path = Path(schema_path)
        self.settings_path = Path(settings_path)
        self.translator = translator
        self.release = release
        # Loaded here so that a broken schema fails at construction
        self.load_schema()
        logger.debug(
            "Config panel '%s' ready (release %s)", entity, release.value
        )

    def load_schema(self) -> Container:
        """Load the schema of this panel."""
        return load_container(self.schema_path)

    def saved_settings(self) -> dict[str, Any]:
        """Load the saved settings of this panel."""
        return load_saved_settings(self.settings_path)

    @staticmethod
    def value_or_default(
        option_id: str, option: OptionSchema, saved: dict[str, Any]
    ) -> Any:
        """Effective value of an option: saved value, else schema default."""
        return value_or_default(option_id, option, saved)

    def get(self, filter_key: FilterKey, mode: GetMode) -> Any:
        """Render the part of the panel designated by ``filter_key``.

        A single option in classic mode yields its bare normalized value;
        everything else yields a render of ``mode``.

        Raises:
            FilterKeyNotFoundError: If the key designates no existing node
            ConfigPanelError: For any other load or render failure

        """
        container = self.load_schema()
        if filter_key.kind is not KeyKind.ALL and not _exists(container, filter_key):
            raise FilterKeyNotFoundError(self.entity, filter_key)

        if filter_key.kind is KeyKind.OPTION and mode is GetMode.CLASSIC:
            return self.get_single(filter_key, container)
        return self.get_multi(filter_key, mode, ExcludeKey.nothing(), container)

    def list(self, mode: GetMode) -> Any:
        """Render the whole panel.

        Classic listings always leave out ``security.root_access``.
        """
        if mode is GetMode.CLASSIC:
            exclude_key = ExcludeKey.for_section("security", "root_access")
        else:
            exclude_key = ExcludeKey.nothing()
        return self.get_multi(FilterKey.everything(), mode, exclude_key)

    def get_single(
        self, filter_key: FilterKey, container: Container | None = None
    ) -> Any:
        """Normalized value of the single option designated by ``filter_key``.

        Allowed-empty options have no value and yield None. The schema is
        loaded unless ``container`` is given.

        Raises:
            FilterKeyNotFoundError: If the option does not exist
            UnknownOptionTypeError: If the option type tag is unknown
            ValueNotSetError: If the option has no saved value nor default

        """
        if container is None:
            container = self.load_schema()
        option = _find_option(container, filter_key)
        if option is None:
            raise FilterKeyNotFoundError(self.entity, filter_key)

        option_id = filter_key.option
        option_type = option_types.parse_option_type(option_id, option)
        if option_type in ALLOWED_EMPTY_TYPES:
            return None

        value = self.value_or_default(option_id, option, self.saved_settings())
        return option_types.normalize(option_type, value, self.release)

    def get_multi(
        self,
        filter_key: FilterKey,
        mode: GetMode,
        exclude_key: ExcludeKey,
        container: Container | None = None,
    ) -> Any:
        """Render every selected option in ``mode``.

        The schema is loaded unless ``container`` is given.
        """
        logger.debug(
            "Rendering '%s' in %s mode (filter=%s, exclude=%s, release=%s)",
            self.entity,
            mode.value,
            filter_key,
            exclude_key,
            self.release.value,
        )
        if container is None:
            container = self.load_schema()
        saved = self.saved_settings()

        if mode is GetMode.CLASSIC:
            return render_classic(
                container, saved, filter_key, exclude_key, self.translator
            )
        if mode is GetMode.EXPORT:
            return render_export(container, saved, filter_key, exclude_key, self.release)
        return render_full(
            container,
            saved,
            filter_key,
            exclude_key,
            self.translator,
            self.release,
        )


def _find_option(container: Container, filter_key: FilterKey) -> OptionSchema | None:
    panel = container.panels.get(filter_key.panel)
    if panel is None:
        return None
    section = panel.sections.get(filter_key.section)
    if section is None:
        return None
    return section.options.get(filter_key.option)


def _exists(container: Container, filter_key: FilterKey) -> bool:
    """Whether ``filter_key`` designates a node of the container."""
    panel = container.panels.get(filter_key.panel)
    if panel is None:
        return False
    if filter_key.section is None:
        return True
    section = panel.sections.get(filter_key.section)
    if section is None:
        return False
    if filter_key.option is None:
        return True
    return filter_key.option in section.options
