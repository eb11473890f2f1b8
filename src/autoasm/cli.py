"""
Command-line interface for auto-assembler.

Inspects how a class is seen by the assembler, and assembles JSON
records into model classes to check a mapping without writing code.
"""

import importlib
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import click

from . import __version__
from .assembler import get_default, to_dict
from .constants import DEFAULT_LOG_LEVEL, ENV_LOG_LEVEL
from .errors import AssemblerError
from .introspection import list_properties
from .markers import get_mapped_class, get_runtime_type, is_convertible


def _load_class(path: str) -> type:
    """Import ``package.module:ClassName``."""
    module_name, sep, qualname = path.partition(":")
    if not sep or not module_name or not qualname:
        raise click.BadParameter(f"expected MODULE:CLASS, got {path!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name}: {e}") from e
    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise click.BadParameter(f"{module_name} has no attribute {qualname}") from e
    if not isinstance(obj, type):
        raise click.BadParameter(f"{path} is not a class")
    return obj


def _fail(message: str) -> NoReturn:
    click.echo(click.style(message, fg="red"), err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log every property resolution")
def main(verbose: bool) -> None:
    """
    Auto-assembler.

    Transform objects between source and target shapes by matching
    property names.
    """
    level = "DEBUG" if verbose else os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("target")
def inspect(target: str) -> None:
    """Show the properties and markers of TARGET (MODULE:CLASS)."""
    cls = _load_class(target)

    try:
        descriptors = list_properties(cls)
    except AssemblerError as e:
        _fail(f"Error inspecting {target}: {e}")

    click.echo(click.style(f"{cls.__module__}.{cls.__qualname__}", fg="cyan", bold=True))
    if is_convertible(cls):
        click.echo("  convertible")
    mapped = get_mapped_class(cls)
    if mapped is not None:
        click.echo(f"  mapped class: {mapped.__qualname__}")
    registry = get_runtime_type(cls)
    if registry is not None:
        names = ", ".join(sub.__qualname__ for sub in registry.subtypes)
        click.echo(f"  runtime types: {names}")

    for descriptor in descriptors:
        access = ("r" if descriptor.readable else "-") + ("w" if descriptor.writable else "-")
        line = f"  {access} {descriptor.name}: {descriptor.property_type.__qualname__}"
        directive = descriptor.directive
        if directive is not None and directive.is_constant:
            line += f" = {directive.value!r}"
        elif directive is not None and directive.source:
            line += f" <- {directive.source}"
        click.echo(line)


@main.command()
@click.argument("target")
@click.argument("record", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--schema",
    type=click.Path(exists=True, path_type=Path),
    help="JSON schema the record must satisfy before assembly",
)
@click.option("--compact", is_flag=True, help="Output compact JSON (no indentation)")
def assemble(target: str, record: Path, schema: Optional[Path], compact: bool) -> None:
    """Assemble a JSON RECORD into TARGET (MODULE:CLASS) and print it.

    RECORD must hold a JSON object; its keys are matched against the
    property names of TARGET, nested objects included.

    Example:

        autoasm assemble shop.dto:OrderDTO order.json
    """
    cls = _load_class(target)

    try:
        with open(record) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        _fail(f"Error parsing {record}: {e}")

    if not isinstance(data, dict):
        _fail(f"{record} does not hold a JSON object")

    if schema is not None:
        import jsonschema

        with open(schema) as f:
            schema_data = json.load(f)
        try:
            jsonschema.validate(data, schema_data)
        except jsonschema.ValidationError as e:
            _fail(f"✗ Validation failed: {e.message}")

    try:
        result = get_default().assemble(data, cls)
    except AssemblerError as e:
        _fail(f"Error assembling {target}: {e}")

    click.echo(json.dumps(to_dict(result), indent=None if compact else 2, default=str))


if __name__ == "__main__":
    main()
