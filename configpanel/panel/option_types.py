"""Option type registry.

Every :class:`~configpanel.models.OptionType` tag maps to one handler
implementing the four type-specific behaviors:

- whether the value is hidden in prompts (passwords);
- normalization, turning a raw value into its canonical form;
- humanization, turning a canonical value into a display string;
- extra schema fields synthesized for the full view of a given release.

Release-dependent behavior is defined here and nowhere else in the renderers,
apart from the two hard-coded ``security.root_access`` rules.
"""

from __future__ import annotations

import json
from typing import Any

from configpanel.exceptions import OptionValueError, UnknownOptionTypeError
from configpanel.models import OptionSchema, OptionType, ReleaseVariant

PASSWORD_MASK = "**************"

TRUTHY_TOKENS = frozenset({"1", "yes", "y", "true", "t", "on"})
FALSY_TOKENS = frozenset({"0", "no", "n", "false", "f", "off"})

# Themes shipped with the user portal
PORTAL_THEMES = ["unsplash", "vapor", "light", "default", "clouds"]


def generic_humanize(value: Any) -> str:
    """String conversion used when a type has no specific humanization.

    Strings are returned as-is rather than re-quoted.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


class OptionTypeHandler:
    """Default behavior shared by all option types."""

    tag: OptionType

    def hides_input(self) -> bool:
        """Whether the value must be hidden in prompts and compact output."""
        return False

    def normalize(self, value: Any, release: ReleaseVariant) -> Any:
        """Return the canonical form of ``value``."""
        return value

    def humanize(self, value: Any) -> str:
        """Return the display string of a normalized value."""
        return generic_humanize(value)

    def full_extra_fields(
        self, option_id: str, release: ReleaseVariant
    ) -> dict[str, Any]:
        """Schema fields synthesized for the full view."""
        return {}


class DisplayTextOption(OptionTypeHandler):
    tag = OptionType.DISPLAY_TEXT


class MarkdownOption(OptionTypeHandler):
    tag = OptionType.MARKDOWN


class AlertOption(OptionTypeHandler):
    tag = OptionType.ALERT


class ButtonOption(OptionTypeHandler):
    tag = OptionType.BUTTON


class TextOption(OptionTypeHandler):
    """Free text; shared by the ``string`` and ``text`` tags."""

    def __init__(self, tag: OptionType = OptionType.STRING) -> None:
        self.tag = tag

    def normalize(self, value: Any, release: ReleaseVariant) -> Any:
        """An empty string means no value on bookworm; bullseye keeps it."""
        if release is ReleaseVariant.BOOKWORM and value == "":
            return None
        return value


class PasswordOption(TextOption):
    def __init__(self) -> None:
        super().__init__(OptionType.PASSWORD)

    def hides_input(self) -> bool:
        return True

    def humanize(self, value: Any) -> str:
        return PASSWORD_MASK

    def full_extra_fields(
        self, option_id: str, release: ReleaseVariant
    ) -> dict[str, Any]:
        if release is ReleaseVariant.BOOKWORM:
            return {"redact": True}
        return {}


class ColorOption(OptionTypeHandler):
    tag = OptionType.COLOR


class NumberOption(OptionTypeHandler):
    """Numbers; shared by the ``number`` and ``range`` tags."""

    def __init__(self, tag: OptionType = OptionType.NUMBER) -> None:
        self.tag = tag

    def humanize(self, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise OptionValueError(self.tag.value, value, "not a number")
        return str(value)


class BooleanOption(OptionTypeHandler):
    """Booleans are stored and exported as the integers 1 and 0."""

    tag = OptionType.BOOLEAN

    def _to_int(self, value: Any) -> int:
        if isinstance(value, bool):
            return 1 if value else 0
        if isinstance(value, int) and value in (0, 1):
            return value
        if isinstance(value, str):
            if value in TRUTHY_TOKENS:
                return 1
            if value in FALSY_TOKENS:
                return 0
        raise OptionValueError(self.tag.value, value, "not a boolean token")

    def normalize(self, value: Any, release: ReleaseVariant) -> Any:
        return self._to_int(value)

    def humanize(self, value: Any) -> str:
        # Humanization may receive raw values straight from the settings store
        return "yes" if self._to_int(value) == 1 else "no"

    def full_extra_fields(
        self, option_id: str, release: ReleaseVariant
    ) -> dict[str, Any]:
        if release is ReleaseVariant.BOOKWORM:
            return {"yes": 1, "no": 0}
        return {}


class DateOption(OptionTypeHandler):
    tag = OptionType.DATE


class TimeOption(OptionTypeHandler):
    tag = OptionType.TIME


class EmailOption(OptionTypeHandler):
    tag = OptionType.EMAIL


class PathOption(OptionTypeHandler):
    tag = OptionType.PATH


class UrlOption(OptionTypeHandler):
    tag = OptionType.URL


class FileOption(OptionTypeHandler):
    tag = OptionType.FILE


class SelectOption(OptionTypeHandler):
    tag = OptionType.SELECT

    def full_extra_fields(
        self, option_id: str, release: ReleaseVariant
    ) -> dict[str, Any]:
        # TODO: list the themes installed under the portal assets directory
        if option_id == "portal_theme":
            return {"choices": list(PORTAL_THEMES)}
        return {}


class TagsOption(OptionTypeHandler):
    tag = OptionType.TAGS

    def full_extra_fields(
        self, option_id: str, release: ReleaseVariant
    ) -> dict[str, Any]:
        if release is ReleaseVariant.BULLSEYE:
            return {"choices": None}
        return {}


class DomainOption(OptionTypeHandler):
    """Domains are stored without scheme and trailing slashes."""

    tag = OptionType.DOMAIN

    def normalize(self, value: Any, release: ReleaseVariant) -> Any:
        if not isinstance(value, str):
            raise OptionValueError(self.tag.value, value, "not a string")
        stripped = value
        while stripped.startswith("https://"):
            stripped = stripped[len("https://") :]
        while stripped.startswith("http://"):
            stripped = stripped[len("http://") :]
        return stripped.rstrip("/")


class AppOption(OptionTypeHandler):
    tag = OptionType.APP


class UserOption(OptionTypeHandler):
    tag = OptionType.USER


class GroupOption(OptionTypeHandler):
    tag = OptionType.GROUP


REGISTRY: dict[OptionType, OptionTypeHandler] = {
    OptionType.DISPLAY_TEXT: DisplayTextOption(),
    OptionType.MARKDOWN: MarkdownOption(),
    OptionType.ALERT: AlertOption(),
    OptionType.BUTTON: ButtonOption(),
    OptionType.STRING: TextOption(OptionType.STRING),
    OptionType.TEXT: TextOption(OptionType.TEXT),
    OptionType.PASSWORD: PasswordOption(),
    OptionType.COLOR: ColorOption(),
    OptionType.NUMBER: NumberOption(OptionType.NUMBER),
    OptionType.RANGE: NumberOption(OptionType.RANGE),
    OptionType.BOOLEAN: BooleanOption(),
    OptionType.DATE: DateOption(),
    OptionType.TIME: TimeOption(),
    OptionType.EMAIL: EmailOption(),
    OptionType.PATH: PathOption(),
    OptionType.URL: UrlOption(),
    OptionType.FILE: FileOption(),
    OptionType.SELECT: SelectOption(),
    OptionType.TAGS: TagsOption(),
    OptionType.DOMAIN: DomainOption(),
    OptionType.APP: AppOption(),
    OptionType.USER: UserOption(),
    OptionType.GROUP: GroupOption(),
}


def parse_option_type(option_id: str, option: OptionSchema) -> OptionType:
    """Turn the raw type string of an option into its tag.

    Raises:
        UnknownOptionTypeError: If the tag is not in the registry

    """
    try:
        return OptionType(option.option_type)
    except ValueError:
        raise UnknownOptionTypeError(option_id, option.option_type) from None


def handler_for(option_type: OptionType) -> OptionTypeHandler:
    """Registry lookup; total over :class:`OptionType`."""
    return REGISTRY[option_type]


def normalize(option_type: OptionType, value: Any, release: ReleaseVariant) -> Any:
    """Canonical form of ``value`` for an option type."""
    return handler_for(option_type).normalize(value, release)


def humanize(option_type: OptionType, value: Any) -> str:
    """Display string of ``value``; hidden types are always masked."""
    handler = handler_for(option_type)
    if handler.hides_input():
        return PASSWORD_MASK
    return handler.humanize(value)
