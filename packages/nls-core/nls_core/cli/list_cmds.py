"""
NLS list commands - run the dispatch entrypoint and inspect stored lists.

Commands:
    nls call --named-key <name> --method <method> -k "ID;VALUE" ...
    nls call --args-file <file>        - arguments from a JSON/YAML mapping
    nls show <name>                    - print a list
    nls names                          - print bound names
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
import yaml

from ..args import ARG_KEYS, ARG_METHOD, ARG_NAMED_KEY
from ..dispatch import dispatch
from ..errors import NamedListError
from ..persistence import ListStore, open_store
from ..store import NamedListStore


def _open_backend(ctx: click.Context) -> ListStore:
    settings = (ctx.obj or {}).get("storage")
    try:
        return open_store(settings)
    except (NamedListError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _load_args_file(path: str) -> Dict[str, Any]:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        click.echo(f"Error: {path} must contain a mapping of arguments", err=True)
        sys.exit(1)
    return data


def _echo_records(records, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps(records, indent=2))
        return
    if not records:
        click.echo("(empty)")
        return
    for record in records:
        click.echo(record)


@click.command("call")
@click.option("--named-key", "named_key", default=None, help="Name of the list to operate on")
@click.option("--method", "-m", default=None, help="add | del | delall (anything else only removes)")
@click.option("--key", "-k", "keys", multiple=True, help="Record \"ID;VALUE\" (repeatable)")
@click.option("--args-file", type=click.Path(exists=True, dir_okay=False), default=None,
              help="JSON/YAML file with keys, method and named-key")
@click.option("--json-out", "json_output", is_flag=True, help="Output result as JSON")
@click.pass_context
def call(ctx: click.Context, named_key: Optional[str], method: Optional[str],
         keys: Tuple[str, ...], args_file: Optional[str], json_output: bool):
    """Invoke the store with a batch of records and a method."""
    args: Dict[str, Any] = _load_args_file(args_file) if args_file else {}
    if keys or not args_file:
        args[ARG_KEYS] = list(keys)
    if method is not None:
        args[ARG_METHOD] = method
    if named_key is not None:
        args[ARG_NAMED_KEY] = named_key

    backend = _open_backend(ctx)
    try:
        result = dispatch(backend, args)
    except NamedListError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        backend.close()

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(
        f"{result.method} on '{result.named_key}': "
        f"removed {len(result.removed)}, appended {result.appended}"
        + (", cleared" if result.cleared else "")
    )
    _echo_records(result.records, json_output=False)


@click.command("show")
@click.argument("name")
@click.option("--json-out", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx: click.Context, name: str, json_output: bool):
    """Show the records of a named list."""
    backend = _open_backend(ctx)
    try:
        records = NamedListStore(backend).get_list(name)
    except NamedListError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        backend.close()

    if records is None:
        click.echo(f"Named list '{name}' not found.", err=True)
        sys.exit(1)
    _echo_records(records, json_output)


@click.command("names")
@click.pass_context
def names(ctx: click.Context):
    """List bound names."""
    backend = _open_backend(ctx)
    try:
        bound = NamedListStore(backend).names()
    except NamedListError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        backend.close()

    if not bound:
        click.echo("No named lists.")
        return
    for name in bound:
        click.echo(name)
