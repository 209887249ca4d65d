"""Selection walk and value resolution shared by the renderers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

from configpanel.exceptions import ValueNotSetError

if TYPE_CHECKING:
    from configpanel.models import Container, OptionSchema, Panel, Section
    from configpanel.panel.addressing import ExcludeKey, FilterKey


def selected_panels(
    container: Container, filter_key: FilterKey, exclude_key: ExcludeKey
) -> Iterator[tuple[str, Panel]]:
    """Panels kept by the filter and not removed by the exclusion."""
    for panel_id, panel in container.panels.items():
        if not filter_key.matches_panel(panel_id) or exclude_key.excludes_panel(
            panel_id
        ):
            continue
        yield panel_id, panel


def selected_sections(
    panel_id: str, panel: Panel, filter_key: FilterKey, exclude_key: ExcludeKey
) -> Iterator[tuple[str, Section]]:
    """Sections of a panel kept by the filter and not removed by the exclusion."""
    for section_id, section in panel.sections.items():
        if not filter_key.matches_section(
            panel_id, section_id
        ) or exclude_key.excludes_section(panel_id, section_id):
            continue
        yield section_id, section


def selected_options(
    panel_id: str,
    section_id: str,
    section: Section,
    filter_key: FilterKey,
    exclude_key: ExcludeKey,
) -> Iterator[tuple[str, OptionSchema]]:
    """Options of a section kept by the filter and not removed by the exclusion."""
    for option_id, option in section.options.items():
        if not filter_key.matches_option(
            panel_id, section_id, option_id
        ) or exclude_key.excludes_option(panel_id, section_id, option_id):
            continue
        yield option_id, option


def walk(
    container: Container, filter_key: FilterKey, exclude_key: ExcludeKey
) -> Iterator[tuple[str, str, str, OptionSchema]]:
    """Flat walk over every selected option, in document order."""
    for panel_id, panel in selected_panels(container, filter_key, exclude_key):
        for section_id, section in selected_sections(
            panel_id, panel, filter_key, exclude_key
        ):
            for option_id, option in selected_options(
                panel_id, section_id, section, filter_key, exclude_key
            ):
                yield panel_id, section_id, option_id, option


def value_or_default(
    option_id: str, option: OptionSchema, saved: dict[str, Any]
) -> Any:
    """Effective value of an option: saved value, else schema default.

    Saved values are keyed by bare option id.

    Raises:
        ValueNotSetError: If the option has neither

    """
    if option_id in saved:
        return saved[option_id]
    if option.default is not None:
        return option.default
    raise ValueNotSetError(option_id)
