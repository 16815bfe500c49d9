"""CLI command to load a configuration file against a schema.

The schema is referenced as ``package.module:ATTRIBUTE`` and must name a
``Schema`` object. The loaded instance is printed as a table or as JSON;
parse failures are reported with the offending line.
"""

from __future__ import annotations

import enum
import importlib
import json
import logging
from dataclasses import asdict, is_dataclass
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table

from palconf.api import from_file
from palconf.config import load_loader_config
from palconf.errors import PalError
from palconf.schema import Schema
from palconf.types import Tagged

logger = logging.getLogger("palconf.cli.check")


def load_schema(ref: str) -> Schema:
    """Import the schema named by ``module:attribute``.

    Raises:
        ValueError: The reference is malformed or does not name a Schema.
        ImportError: The module cannot be imported.
    """
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Schema reference must look like 'module:ATTRIBUTE', got {ref!r}")

    module = importlib.import_module(module_name)
    schema = getattr(module, attr, None)
    if not isinstance(schema, Schema):
        raise ValueError(f"{ref} is not a palconf Schema")
    return schema


def to_plain(value: Any) -> Any:
    """Convert a parsed value into JSON-compatible data."""
    if isinstance(value, Tagged):
        return {"tag": value.tag, "value": to_plain(value.value)}
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, SimpleNamespace):
        return {k: to_plain(v) for k, v in vars(value).items()}
    if is_dataclass(value) and not isinstance(value, type):
        return to_plain(asdict(value))
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


def render_table(schema: Schema, instance: SimpleNamespace, console: Console) -> None:
    table = Table(title=schema.name)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")

    values: Dict[str, Any] = vars(instance)
    for f in schema:
        if f.name in values:
            table.add_row(f.name, json.dumps(to_plain(values[f.name]), ensure_ascii=False))
        else:
            table.add_row(f.name, "[dim]<unset>[/dim]")

    console.print(table)


def check_command(args, console: Optional[Console] = None) -> int:
    """Execute the check command.

    Args:
        args: Parsed command-line arguments.
        console: Output console (stdout by default).

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console()

    try:
        schema = load_schema(args.schema)
        config = load_loader_config(getattr(args, "config", None))
    except (ImportError, ValueError) as exc:
        logger.error("Cannot prepare check: %s", exc)
        return 2

    path = Path(args.file)
    try:
        session = from_file(schema, path.name, config=config, config_dir=path.parent)
    except PalError as exc:
        logger.error("Invalid configuration %s: %s", path, exc)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read %s: %s", path, exc)
        return 1

    with session:
        instance = session.instance
        missing = session.missing()
        if getattr(args, "format", "table") == "json":
            console.print_json(json.dumps(to_plain(instance), ensure_ascii=False))
        else:
            render_table(schema, instance, console)

    if missing:
        logger.warning("Required field(s) not set: %s", ", ".join(missing))
    return 0
