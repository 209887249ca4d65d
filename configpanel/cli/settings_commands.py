"""Global settings CLI commands.

Adds commands:
- settings get
- settings list
"""

from __future__ import annotations

from typing import Any

import click

from configpanel.cli.output import format_result
from configpanel.config.config import ConfigManager
from configpanel.exceptions import ConfigPanelError, SettingsModeConflictError
from configpanel.i18n import _
from configpanel.models import GetMode
from configpanel.panel.settings import SettingsConfigPanel
from configpanel.utils.logging_config import get_logger

logger = get_logger(__name__)


def _get_mode(full: bool, export: bool) -> GetMode:
    """Pick the render mode from the --full and --export flags.

    Raises:
        SettingsModeConflictError: If both flags are set

    """
    if full and export:
        msg = _("Cannot use --full and --export at the same time")
        raise SettingsModeConflictError(msg)
    if full:
        return GetMode.FULL
    if export:
        return GetMode.EXPORT
    return GetMode.CLASSIC


def _get_config_manager(ctx: click.Context) -> ConfigManager:
    """ConfigManager for the config file given to the root command, if any."""
    config_file = ctx.obj.get("config") if ctx.obj else None
    return ConfigManager(config_file)


def _fail(ctx: click.Context, error: ConfigPanelError) -> click.ClickException:
    verbosity_manager = ctx.obj.get("verbosity_manager") if ctx.obj else None
    if verbosity_manager is not None and verbosity_manager.should_show_stack_trace():
        logger.exception("Command failed")
    return click.ClickException(str(error))


@click.group()
def settings() -> None:
    """Read the global settings."""


@settings.command("get")
@click.argument("setting")
@click.option("--export", "-e", is_flag=True, help=_("Machine-readable values"))
@click.option("--full", "-f", is_flag=True, help=_("Full tree with metadata"))
@click.option("--json", "as_json", is_flag=True, help=_("Output as JSON"))
@click.pass_context
def settings_get(
    ctx: click.Context, setting: str, export: bool, full: bool, as_json: bool
) -> None:
    """Get the value of a setting, section or panel."""
    try:
        mode = _get_mode(full, export)
        panel = SettingsConfigPanel(_get_config_manager(ctx))
        result: Any = panel.get_setting(setting, mode)
    except ConfigPanelError as e:
        raise _fail(ctx, e) from e
    click.echo(format_result(result, as_json))


@settings.command("list")
@click.option("--export", "-e", is_flag=True, help=_("Machine-readable values"))
@click.option("--full", "-f", is_flag=True, help=_("Full tree with metadata"))
@click.option("--json", "as_json", is_flag=True, help=_("Output as JSON"))
@click.pass_context
def settings_list(ctx: click.Context, export: bool, full: bool, as_json: bool) -> None:
    """List every setting."""
    try:
        mode = _get_mode(full, export)
        panel = SettingsConfigPanel(_get_config_manager(ctx))
        result: Any = panel.list(mode)
    except ConfigPanelError as e:
        raise _fail(ctx, e) from e
    click.echo(format_result(result, as_json))
