"""Shared I/O helpers for CLI commands."""

import json
import sys
from typing import Any

import click
from pydantic import ValidationError

from ..models.lead import Lead


def load_json(stream) -> Any:
    """Read a JSON document from an open file, exiting on bad input."""
    try:
        return json.load(stream)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{stream.name}: invalid JSON ({e})")


def load_leads(stream) -> list[Lead]:
    """Read lead records (a list, or a single object) from a file."""
    data = load_json(stream)
    records = data if isinstance(data, list) else [data]
    leads = []
    for index, record in enumerate(records):
        try:
            leads.append(Lead.from_record(record))
        except ValidationError as e:
            raise click.ClickException(
                f"{stream.name}: record {index} is not a valid lead ({e.error_count()} error(s))"
            )
    return leads


def echo_json(data: Any, output=None) -> None:
    """Write indented JSON to a file or stdout."""
    text = json.dumps(data, indent=2, ensure_ascii=False)
    click.echo(text, file=output or sys.stdout)
