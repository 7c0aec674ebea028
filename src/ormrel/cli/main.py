#!/usr/bin/env python
"""
Main CLI entry point for ormrel.
"""

import sys
from pathlib import Path

import click
from loguru import logger
from rich import print as rprint

from ormrel import __version__
from ormrel.config import AppConfig, ConfigurationError, load_config
from ormrel.orm import DEFAULT_NAMESPACES
from ormrel.utils.console import console
from ormrel.utils.logging import ormrel_logger, setup_logging

from .generate_cmd import diagrams, generate

env_map = {
    "prod": "production",
    "production": "production",
    "dev": "development",
    "development": "development",
    "test": "test",
}


@click.group(context_settings={"show_default": True})
@click.version_option(version=__version__, prog_name="ormrel")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file path",
)
@click.option(
    "--env",
    "-e",
    type=click.Choice(list(env_map.keys())),
    default="development",
    help="Environment (dev/prod/test)",
)
@click.option(
    "--verbose", "-v", is_flag=True, help="Enable verbose output and debug logging"
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Custom log file path (default: from configuration)",
)
@click.option("--log-info", is_flag=True, help="Show logging configuration and exit")
@click.pass_context
def cli(ctx, config, env, verbose, log_file, log_info):
    """ormrel - generate Rel integrity constraints from ORM models"""
    ctx.ensure_object(dict)
    environment = env_map[env.lower()]

    try:
        app_config: AppConfig = load_config(
            config_path=config, environment=environment, quiet=not verbose
        )
    except ConfigurationError as e:
        rprint(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    ctx.obj["app_config"] = app_config
    ctx.obj["config_path"] = config
    ctx.obj["environment"] = environment
    ctx.obj["verbose"] = verbose

    setup_logging(
        verbose=verbose,
        log_file=log_file,
        app_config=app_config,
        environment=environment,
    )

    if log_info:
        ormrel_logger.show_log_info(console)
        ctx.exit()

    logger.debug(f"ormrel CLI started (environment: {environment}, config={config})")


@cli.command()
@click.pass_context
def info(ctx) -> None:
    """Display information about the ormrel installation."""
    app_config: AppConfig = ctx.obj["app_config"]
    click.echo(f"ormrel version: {__version__}")
    click.echo(f"Python version: {sys.version.split()[0]}")
    click.echo(f"Environment: {ctx.obj['environment']}")
    click.echo(f"Configuration file: {ctx.obj['config_path'] or 'auto'}")
    click.echo(f"Output directory: {app_config.generator.output_dir}")
    click.echo(f"Filename template: {app_config.generator.filename_template}")
    click.echo("\nORM namespaces:")
    for prefix, uri in app_config.namespaces.as_dict().items():
        marker = "" if DEFAULT_NAMESPACES.get(prefix) == uri else " (custom)"
        click.echo(f"  {prefix}: {uri}{marker}")


@cli.group()
def logs():
    """Logging and diagnostics commands."""
    pass


@logs.command("show")
def show_logs():
    """Show current logging configuration."""
    ormrel_logger.show_log_info(console)


cli.add_command(generate)
cli.add_command(diagrams)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
