"""Command-line interface for configpanel."""

from __future__ import annotations

import click

from configpanel.cli.settings_commands import settings as settings_group
from configpanel.cli.verbosity import VerbosityManager
from configpanel.config.config import ConfigManager
from configpanel.exceptions import ConfigurationError
from configpanel.i18n import _
from configpanel.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help=_("Configuration file path"),
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help=_("Increase verbosity (-v: verbose, -vv: debug, -vvv: trace)"),
)
@click.pass_context
def cli(ctx, config, verbose):
    """Configpanel - read the configuration panels of the server."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config

    verbosity_manager = VerbosityManager.from_count(verbose)
    ctx.obj["verbosity_manager"] = verbosity_manager

    try:
        config_manager = ConfigManager(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    observability = config_manager.config.observability
    setup_logging(
        observability.model_copy(
            update={"log_level": verbosity_manager.log_level(observability.log_level)}
        )
    )


cli.add_command(settings_group)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
