"""
Output Formatting.

Renders statistics as tab-separated "name<TAB>value" lines. These are the
only lines written to stdout; callers send everything else to stderr.
"""

import json
import math
from collections.abc import Iterable, Mapping
from typing import Any

import click

from discourse_stats.core.exceptions import NotFoundError
from discourse_stats.statistics import NumericField, ValueKind, numeric_fields, value_kind


def format_value(value: Any) -> str:
    """
    Render a decoded JSON value as text.

    Integral numbers print without a fractional part; strings print
    verbatim; booleans and null use their JSON spelling; arrays and objects
    print as compact JSON.
    """
    kind = value_kind(value)

    if kind is ValueKind.NUMBER:
        if isinstance(value, float) and math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if kind is ValueKind.TEXT:
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def format_line(name: str, value: Any) -> str:
    """Single "name<TAB>value" record."""
    return f"{name}\t{format_value(value)}"


def format_all(fields: Iterable[NumericField]) -> str:
    """One line per field, in the order given. Empty string for no fields."""
    return "\n".join(format_line(field.name, field.value) for field in fields)


def format_one(document: Mapping[str, Any], key: str) -> str:
    """
    Render a single statistic by key, numeric or not.

    Raises:
        NotFoundError: If the key is not in the document
    """
    if key not in document:
        raise NotFoundError(key)
    return format_line(key, document[key])


def print_all(document: Mapping[str, Any]) -> int:
    """
    Write every numeric statistic to stdout, sorted by name.

    A header goes to stderr first so stdout carries data lines only.

    Returns:
        Number of lines written
    """
    fields = numeric_fields(document)
    click.echo("# All numeric statistics:", err=True)
    if fields:
        click.echo(format_all(fields))
    return len(fields)


def print_one(document: Mapping[str, Any], key: str) -> None:
    """Write a single statistic to stdout. Raises NotFoundError if absent."""
    click.echo(format_one(document, key))
