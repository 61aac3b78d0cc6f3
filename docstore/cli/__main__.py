"""DocStore CLI - Main Entry Point.

Commands:
    types    - List registered attribute types
    hints    - Predicate hint table of a document class
    choices  - Choice list of an enumeration attribute
    schema   - Attributes and embeddings of a document class
"""

import importlib
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Type

import click

from . import __version__, __cli_name__
from .colors import dim, error, info, kv, section, table
from ..faults import Fault
from ..models import Document, predicate_hints
from ..types import default_registry


def load_document_class(target: str) -> Type[Document]:
    """Import ``package.module:ClassName`` and check it is a Document subclass."""
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise click.BadParameter(f"expected MODULE:CLASS, got '{target}'")

    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    module = importlib.import_module(module_name)
    document_cls = getattr(module, class_name, None)
    if not (isinstance(document_cls, type) and issubclass(document_cls, Document)):
        raise click.BadParameter(f"'{target}' is not a Document subclass")
    return document_cls


def describe_document(document_cls: Type[Document], seen: Optional[set] = None) -> Dict[str, Any]:
    """Nested description of a document class and its embedded classes."""
    seen = set() if seen is None else seen
    seen.add(document_cls)
    data: Dict[str, Any] = {
        "document": document_cls.__name__,
        "attributes": {
            name: attribute.describe() for name, attribute in document_cls._attributes.items()
        },
        "embeddings": {},
    }
    for name, embedding in document_cls._embeddings.items():
        entry = embedding.describe()
        target = embedding.document_class
        if target not in seen:
            entry["schema"] = describe_document(target, seen)
        data["embeddings"][name] = entry
    return data


@click.group()
@click.version_option(version=__version__, prog_name=__cli_name__)
@click.pass_context
def cli(ctx):
    """Inspect DocStore document classes and attribute types."""
    ctx.ensure_object(dict)


@cli.command("types")
def list_types():
    """List registered attribute types and their predicate hints."""
    rows = []
    for name in default_registry:
        factory = default_registry.resolve(name)
        try:
            hint = default_registry.create(name).predicate_hint
        except TypeError:
            # Factory needs options to be built
            hint = "?"
        rows.append((name, hint, getattr(factory, "__name__", repr(factory))))
    table(["Type", "Hint", "Class"], rows)


@cli.command("hints")
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
def show_hints(target: str, as_json: bool):
    """
    Print the predicate hint table of a document class.

    Examples:
      docstore hints myapp.models:House
      docstore hints myapp.models:House --json
    """
    try:
        document_cls = load_document_class(target)
    except (ImportError, Fault) as e:
        error(f"Failed to load '{target}': {e}")
        sys.exit(1)

    hints = predicate_hints(document_cls)
    if as_json:
        click.echo(json.dumps(hints, indent=2))
        return
    section(document_cls.__name__)
    if not hints:
        dim("  (no attributes)")
        return
    table(["Field", "Hint"], list(hints.items()))


@cli.command("choices")
@click.argument("target")
@click.argument("field")
def show_choices(target: str, field: str):
    """
    Print the (label, value) choice list of an enumeration attribute.

    Examples:
      docstore choices myapp.models:House construction
    """
    try:
        document_cls = load_document_class(target)
    except (ImportError, Fault) as e:
        error(f"Failed to load '{target}': {e}")
        sys.exit(1)

    attribute = document_cls._attributes.get(field)
    if attribute is None:
        error(f"{document_cls.__name__} has no attribute '{field}'")
        sys.exit(1)
    choices = attribute.choices()
    if choices is None:
        error(f"{document_cls.__name__}.{field} is not an enumeration ({attribute.type_name})")
        sys.exit(1)
    table(["Label", "Value"], choices)


@cli.command("schema")
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
def show_schema(target: str, as_json: bool):
    """
    Print attributes and embeddings of a document class, recursively.

    Examples:
      docstore schema myapp.models:House
    """
    try:
        document_cls = load_document_class(target)
        schema = describe_document(document_cls)
    except (ImportError, Fault) as e:
        error(f"Failed to load '{target}': {e}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(schema, indent=2, default=str))
        return
    _print_schema(schema)


def _print_schema(schema: Dict[str, Any], depth: int = 0) -> None:
    indent = 2 + depth * 4
    if depth == 0:
        section(schema["document"])
    for name, attribute in schema["attributes"].items():
        kv(name, f"{attribute['type']} ({attribute['predicate']})", indent=indent)
    for name, embedding in schema["embeddings"].items():
        info(f"{' ' * indent}{name}: embeds {embedding['embeds']} {embedding['document']}")
        if "schema" in embedding:
            _print_schema(embedding["schema"], depth + 1)


def main():
    """Entry point for `docstore` command."""
    cli(obj={})


if __name__ == '__main__':
    main()
