"""
Statistics Document.

Parsed, read-only view of the /site/statistics.json payload and the
numeric field selector used by the formatter and the interactive menu.
"""

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from discourse_stats.core.exceptions import ParseError
from discourse_stats.core.logging import get_logger

logger = get_logger(__name__)


class ValueKind(str, Enum):
    """JSON type of a statistics value."""

    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    NULL = "null"
    NESTED = "nested"


def value_kind(value: Any) -> ValueKind:
    """Classify a decoded JSON value."""
    # bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    if value is None:
        return ValueKind.NULL
    return ValueKind.NESTED


@dataclass(frozen=True)
class NumericField:
    """A statistic whose value is a JSON number."""

    name: str
    value: int | float


class StatisticsDocument(Mapping[str, Any]):
    """
    Immutable mapping of statistic name to decoded JSON value.

    All fields from the source document are kept, numeric or not.
    """

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = MappingProxyType(dict(data))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"StatisticsDocument({dict(self._data)!r})"

    def kind_of(self, key: str) -> ValueKind:
        """Value kind of a field. Raises KeyError when absent."""
        return value_kind(self._data[key])


def parse_statistics(raw: bytes | str) -> StatisticsDocument:
    """
    Build a StatisticsDocument from a response body.

    Args:
        raw: Response body, UTF-8 bytes or text

    Returns:
        Immutable statistics document

    Raises:
        ParseError: If the body is not valid JSON or not a JSON object
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Response is not valid UTF-8: {e}") from e

    try:
        data = json.loads(raw)
    except ValueError as e:
        # JSONDecodeError, or an integer literal over the digit limit
        raise ParseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        found = "array" if isinstance(data, list) else value_kind(data).value
        raise ParseError(f"Expected a JSON object at top level, got {found}")

    document = StatisticsDocument(data)
    logger.debug("Statistics parsed", fields=len(document))
    return document


def numeric_fields(document: Mapping[str, Any]) -> list[NumericField]:
    """Numeric entries of the document, sorted by field name."""
    return [
        NumericField(name, value)
        for name, value in sorted(document.items())
        if value_kind(value) is ValueKind.NUMBER
    ]
