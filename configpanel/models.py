"""Pydantic models for configpanel.

Provides the in-memory schema model (container, panels, sections, options),
the closed enums shared by the engine, and the engine configuration models.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from configpanel.exceptions import UnsupportedReleaseError

SUPPORTED_VERSION = "1.0"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GetMode(str, Enum):
    """Render modes of a config panel."""

    CLASSIC = "classic"  # compact labeled map
    EXPORT = "export"  # raw machine map
    FULL = "full"  # UI-oriented tree


class ReleaseVariant(str, Enum):
    """Platform release generations with distinct rendering behavior."""

    BULLSEYE = "bullseye"
    BOOKWORM = "bookworm"

    @classmethod
    def parse(cls, value: str) -> ReleaseVariant:
        """Parse a release codename or version number.

        Args:
            value: Codename ("bookworm") or VERSION_ID ("12")

        Returns:
            Matching release variant

        Raises:
            UnsupportedReleaseError: If the release is unknown

        """
        normalized = value.strip().lower()
        if normalized in ("bullseye", "11"):
            return cls.BULLSEYE
        if normalized in ("bookworm", "12"):
            return cls.BOOKWORM
        msg = f"Unsupported platform release: {normalized}"
        raise UnsupportedReleaseError(msg, {"version": normalized})


class OptionType(str, Enum):
    """Closed set of option type tags found in schema documents."""

    # display
    DISPLAY_TEXT = "display_text"
    MARKDOWN = "markdown"
    ALERT = "alert"
    # action
    BUTTON = "button"
    # text
    STRING = "string"
    TEXT = "text"
    PASSWORD = "password"
    COLOR = "color"
    # numeric
    NUMBER = "number"
    RANGE = "range"
    # boolean
    BOOLEAN = "boolean"
    # time
    DATE = "date"
    TIME = "time"
    # location
    EMAIL = "email"
    PATH = "path"
    URL = "url"
    # file
    FILE = "file"
    # choice
    SELECT = "select"
    TAGS = "tags"
    # entity
    DOMAIN = "domain"
    APP = "app"
    USER = "user"
    GROUP = "group"


# Display-only and action types never carry a persisted value
ALLOWED_EMPTY_TYPES: frozenset[OptionType] = frozenset(
    {
        OptionType.ALERT,
        OptionType.DISPLAY_TEXT,
        OptionType.MARKDOWN,
        OptionType.FILE,
        OptionType.BUTTON,
    }
)


class OptionSchema(BaseModel):
    """A single option as declared in the schema document."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    optional: bool | None = Field(default=None, description="Option may be left empty")
    option_type: str = Field(alias="type", description="Raw type tag")
    default: Any = Field(default=None, description="Schema default value")
    extra_fields: dict[str, Any] = Field(
        default_factory=dict,
        description="Every other attribute (ask, help, choices, visible...)",
    )

    @property
    def is_optional(self) -> bool:
        """Options are optional unless the schema says otherwise."""
        return True if self.optional is None else self.optional


class Section(BaseModel):
    """A group of options inside a panel."""

    model_config = ConfigDict(frozen=True)

    name: str | dict[str, str] = Field(default="", description="Label or locale table")
    optional: bool = Field(default=True, description="Section may be skipped")
    options: dict[str, OptionSchema] = Field(default_factory=dict)
    extra_fields: dict[str, Any] = Field(default_factory=dict)


class Panel(BaseModel):
    """A group of sections."""

    model_config = ConfigDict(frozen=True)

    name: str | dict[str, str] = Field(default="", description="Label or locale table")
    sections: dict[str, Section] = Field(default_factory=dict)
    extra_fields: dict[str, Any] = Field(default_factory=dict)


class Container(BaseModel):
    """A loaded, version-checked config panel schema."""

    model_config = ConfigDict(frozen=True)

    version: str = Field(default=SUPPORTED_VERSION, description="Schema version")
    i18n_key: str | None = Field(default=None, description="Translation key prefix")
    panels: dict[str, Panel] = Field(default_factory=dict)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Only the supported version may ever be held in memory."""
        if v != SUPPORTED_VERSION:
            msg = f"Unsupported config panel version: {v}"
            raise ValueError(msg)
        return v


class PathsConfig(BaseModel):
    """Filesystem locations read by the engine."""

    schema_template: str = Field(
        default="/usr/share/yunohost/config_{entity}.toml",
        description="Schema path template, {entity} is substituted",
    )
    settings_path: str = Field(
        default="/etc/yunohost/settings.yml",
        description="Persisted settings of the global settings entity",
    )
    locales_dir: str = Field(
        default="/usr/share/yunohost/locales",
        description="Directory holding one <locale>.json per locale",
    )

    @field_validator("schema_template")
    @classmethod
    def validate_schema_template(cls, v: str) -> str:
        """Template must contain the entity placeholder."""
        if "{entity}" not in v:
            msg = "schema_template must contain '{entity}'"
            raise ValueError(msg)
        return v

    def schema_path(self, entity: str) -> str:
        """Return the schema path for an entity."""
        return self.schema_template.replace("{entity}", entity)


class I18nConfig(BaseModel):
    """Translation configuration."""

    locale: str | None = Field(default=None, description="Forced locale code")


class PlatformConfig(BaseModel):
    """Platform release configuration."""

    release: str = Field(
        default="auto",
        description="auto, bullseye or bookworm",
    )

    @field_validator("release")
    @classmethod
    def validate_release(cls, v: str) -> str:
        """Accept auto or anything ReleaseVariant.parse accepts."""
        v = v.strip().lower()
        if v == "auto":
            return v
        try:
            return ReleaseVariant.parse(v).value
        except UnsupportedReleaseError as e:
            raise ValueError(e.message) from e


class ObservabilityConfig(BaseModel):
    """Logging configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(
        default=False, description="Emit JSON log lines"
    )


class EngineConfig(BaseModel):
    """Top-level configuration of the configpanel engine."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)
    platform: PlatformConfig = Field(default_factory=PlatformConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
