"""Exception hierarchy for configpanel.

Every failure of the engine is a typed, recoverable error carrying enough
context (entity, path, offending key) for the CLI to print a precise message.
"""

from __future__ import annotations

from typing import Any


class ConfigPanelError(Exception):
    """Base exception for all configpanel errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize configpanel error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class SchemaLoadError(ConfigPanelError):
    """Schema document could not be turned into a container."""


class SchemaReadError(SchemaLoadError):
    """Schema document is missing or unreadable."""


class SchemaParseError(SchemaLoadError):
    """Schema document is not valid TOML or has the wrong structure."""


class MissingVersionError(SchemaLoadError):
    """Schema document has no top-level version."""


class UnsupportedVersionError(SchemaLoadError):
    """Schema document declares a version this engine does not support."""

    def __init__(self, version: Any, details: dict[str, Any] | None = None):
        """Initialize with the offending version value."""
        super().__init__(f"Unsupported config panel version: {version!r}", details)
        self.version = version


class ReservedKeywordError(SchemaLoadError):
    """An option id collides with a reserved schema keyword."""

    def __init__(self, option_id: str, details: dict[str, Any] | None = None):
        """Initialize with the offending option id."""
        super().__init__(
            f"Option id '{option_id}' is a reserved keyword and cannot be used",
            details,
        )
        self.option_id = option_id


class MissingOptionIdError(SchemaLoadError):
    """An option entry has an empty id."""


class MissingOptionTypeError(SchemaLoadError):
    """An option entry has no type."""


class SettingsLoadError(ConfigPanelError):
    """Settings document exists but cannot be read or parsed."""


class AddressingError(ConfigPanelError):
    """Dotted filter/exclude key cannot be parsed."""


class FilterKeyNoneError(AddressingError):
    """Filter or exclude key is an empty string."""

    def __init__(self) -> None:
        """Initialize empty-key error."""
        super().__init__("FilterKey cannot be empty")


class FilterKeyTooDeepError(AddressingError):
    """Filter or exclude key has more than three dotted segments."""

    def __init__(self, filter_key: str) -> None:
        """Initialize with the offending key."""
        super().__init__(
            f"FilterKey cannot have so many depth levels (3 max): {filter_key}"
        )
        self.filter_key = filter_key


class ResolutionError(ConfigPanelError):
    """A render could not resolve a node, type or value."""


class FilterKeyNotFoundError(ResolutionError):
    """Filter key does not designate any node of the container."""

    def __init__(self, entity: str, filter_key: Any) -> None:
        """Initialize with the entity and the key that was not found."""
        super().__init__(
            f"'{filter_key}' was not found in the '{entity}' config panel",
            {"entity": entity, "filter_key": str(filter_key)},
        )
        self.entity = entity
        self.filter_key = filter_key


class UnknownOptionTypeError(ResolutionError):
    """Option declares a type tag that is not in the registry."""

    def __init__(self, option_id: str, option_type: str) -> None:
        """Initialize with the option and its declared type."""
        super().__init__(
            f"Option '{option_id}' has unknown type '{option_type}'",
            {"option_id": option_id, "option_type": option_type},
        )
        self.option_id = option_id
        self.option_type = option_type


class ValueNotSetError(ResolutionError):
    """Required option has neither a saved value nor a default."""

    def __init__(self, option_id: str) -> None:
        """Initialize with the option id."""
        super().__init__(
            f"Option '{option_id}' does not have a default value "
            "and does not have a saved setting"
        )
        self.option_id = option_id


class MissingLabelError(ResolutionError):
    """No label could be resolved for a mandatory label field."""

    def __init__(self, option_id: str, field: str) -> None:
        """Initialize with the option id and label field."""
        super().__init__(
            f"Field '{field}' is empty (or not a string) for option '{option_id}'"
        )
        self.option_id = option_id
        self.field = field


class OptionValueError(ConfigPanelError):
    """A value failed type-specific normalization or humanization."""

    def __init__(self, option_type: str, value: Any, reason: str = "") -> None:
        """Initialize with the type and the rejected value."""
        message = f"Invalid value {value!r} for option type '{option_type}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.option_type = option_type
        self.value = value


class UnsupportedReleaseError(ConfigPanelError):
    """Platform release cannot be detected or is not supported."""


class ConfigurationError(ConfigPanelError):
    """Engine configuration is invalid."""


class TranslationError(ConfigPanelError):
    """Base error for the translation subsystem."""


class LocalesReadError(TranslationError):
    """Locale directory or locale file cannot be read."""


class MissingTranslationKeyError(TranslationError):
    """Translation key is missing from both current and fallback locale."""

    def __init__(self, key: str, locale: str) -> None:
        """Initialize with the key and locale."""
        super().__init__(f"Missing translation key for locale {locale}: {key}")
        self.key = key
        self.locale = locale


class TranslationFormatError(TranslationError):
    """Translation string could not be formatted with the given parameters."""


class SettingsModeConflictError(ConfigPanelError):
    """Both --full and --export were requested."""
