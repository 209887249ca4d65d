"""Dotted-path selectors scoping a render to, or away from, part of a panel.

A key is relative to a given config panel:

- ``security`` designates the whole ``security`` panel
- ``security.webadmin`` designates the ``webadmin`` section in that panel
- ``security.webadmin.webadmin_allowlist_enabled`` is a single option
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from configpanel.exceptions import FilterKeyNoneError, FilterKeyTooDeepError

MAX_DEPTH = 3


class KeyKind(str, Enum):
    """Depth designated by a key."""

    ALL = "all"  # Everything for filters, Nothing for excludes
    PANEL = "panel"
    SECTION = "section"
    OPTION = "option"


def _split(s: str) -> tuple[str | None, str | None, str | None]:
    """Split a dotted key into (panel, section, option)."""
    if s == "":
        raise FilterKeyNoneError
    parts = s.split(".")
    if len(parts) > MAX_DEPTH:
        raise FilterKeyTooDeepError(s)
    padded = parts + [None] * (MAX_DEPTH - len(parts))
    return padded[0], padded[1], padded[2]


@dataclass(frozen=True)
class _DottedKey:
    panel: str | None = None
    section: str | None = None
    option: str | None = None

    @property
    def kind(self) -> KeyKind:
        """Depth of this key."""
        if self.panel is None:
            return KeyKind.ALL
        if self.section is None:
            return KeyKind.PANEL
        if self.option is None:
            return KeyKind.SECTION
        return KeyKind.OPTION

    def __str__(self) -> str:
        return ".".join(p for p in (self.panel, self.section, self.option) if p is not None)


@dataclass(frozen=True)
class FilterKey(_DottedKey):
    """Selects a panel, section or option; the empty key selects everything."""

    @classmethod
    def parse(cls, s: str) -> FilterKey:
        """Parse ``panel[.section[.option]]``.

        Raises:
            FilterKeyNoneError: If ``s`` is empty
            FilterKeyTooDeepError: If ``s`` has more than three segments

        """
        return cls(*_split(s))

    @classmethod
    def everything(cls) -> FilterKey:
        """Key matching every node."""
        return cls()

    @classmethod
    def for_panel(cls, panel: str) -> FilterKey:
        return cls(panel)

    @classmethod
    def for_section(cls, panel: str, section: str) -> FilterKey:
        return cls(panel, section)

    @classmethod
    def for_option(cls, panel: str, section: str, option: str) -> FilterKey:
        return cls(panel, section, option)

    def matches_panel(self, panel_id: str) -> bool:
        """Whether the panel is selected or contains the selection."""
        return self.panel is None or self.panel == panel_id

    def matches_section(self, panel_id: str, section_id: str) -> bool:
        """Whether the section is selected or contains the selection."""
        if not self.matches_panel(panel_id):
            return False
        return self.section is None or self.section == section_id

    def matches_option(self, panel_id: str, section_id: str, option_id: str) -> bool:
        """Whether the option is selected."""
        if not self.matches_section(panel_id, section_id):
            return False
        return self.option is None or self.option == option_id


@dataclass(frozen=True)
class ExcludeKey(_DottedKey):
    """Removes a panel, section or option from a render; the empty key removes nothing."""

    @classmethod
    def parse(cls, s: str) -> ExcludeKey:
        """Parse ``panel[.section[.option]]``.

        Raises:
            FilterKeyNoneError: If ``s`` is empty
            FilterKeyTooDeepError: If ``s`` has more than three segments

        """
        return cls(*_split(s))

    @classmethod
    def nothing(cls) -> ExcludeKey:
        """Key excluding no node."""
        return cls()

    @classmethod
    def for_panel(cls, panel: str) -> ExcludeKey:
        return cls(panel)

    @classmethod
    def for_section(cls, panel: str, section: str) -> ExcludeKey:
        return cls(panel, section)

    @classmethod
    def for_option(cls, panel: str, section: str, option: str) -> ExcludeKey:
        return cls(panel, section, option)

    def __str__(self) -> str:
        if self.kind is KeyKind.ALL:
            return "NOTHING"
        return super().__str__()

    def excludes_panel(self, panel_id: str) -> bool:
        """Only a panel key removes a whole panel."""
        return self.kind is KeyKind.PANEL and self.panel == panel_id

    def excludes_section(self, panel_id: str, section_id: str) -> bool:
        """A panel key removes its sections; a section key removes itself."""
        kind = self.kind
        if kind is KeyKind.PANEL:
            return self.panel == panel_id
        if kind is KeyKind.SECTION:
            return self.panel == panel_id and self.section == section_id
        return False

    def excludes_option(self, panel_id: str, section_id: str, option_id: str) -> bool:
        """Any key removes the options beneath what it designates."""
        kind = self.kind
        if kind is KeyKind.ALL:
            return False
        if kind is KeyKind.PANEL:
            return self.panel == panel_id
        if kind is KeyKind.SECTION:
            return self.panel == panel_id and self.section == section_id
        return (
            self.panel == panel_id
            and self.section == section_id
            and self.option == option_id
        )
