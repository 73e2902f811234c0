"""
NLS CLI Main Entry Point

Usage:
    nls call --named-key <name> --method add|del|delall [-k RECORD ...]
    nls call --args-file args.yaml
    nls show <name> [--json-out]
    nls names
    nls version
"""
from __future__ import annotations

import logging
from typing import Optional

import click

from .. import __version__
from ..persistence import BACKENDS
from ..services.config_service import get_logging_settings, get_storage_settings


def _configure_logging(verbose: bool, config_path: Optional[str]) -> None:
    level = "DEBUG" if verbose else str(get_logging_settings(config_path).get("level", "WARNING"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.version_option(version=__version__, prog_name="nls")
@click.option("--backend", type=click.Choice(BACKENDS), default=None,
              help="Storage backend (default: from config, else file)")
@click.option("--path", "store_path", default=None,
              help="Store directory (file) or database path (sqlite)")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              default=None, help="Path to config.yaml")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, backend: Optional[str], store_path: Optional[str],
        config_path: Optional[str], verbose: bool):
    """NLS CLI - named list store."""
    _configure_logging(verbose, config_path)

    settings = dict(get_storage_settings(config_path))
    if backend:
        settings["backend"] = backend
    if store_path:
        settings["path"] = store_path

    ctx.ensure_object(dict)
    ctx.obj["storage"] = settings


# Register list commands
from .list_cmds import call, show, names  # noqa: E402

cli.add_command(call)
cli.add_command(show)
cli.add_command(names)


@cli.command("version")
def version():
    """Show NLS CLI version."""
    click.echo(f"nls CLI v{__version__}")


# Entry point
def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
