"""
repositories/list_codec.py
--------------------------
At-rest representation of list columns (user notifications, question
replies): a JSONB array of strings.

Appending is not done here. It is a store-side SET expression
(see `append_expression`), so the codec only defines how a whole list
is written and read back.
"""

import json
from typing import Any, Iterable

from psycopg2.extras import Json

from db.query_builder import PLACEHOLDER, SetExpression
from repositories.errors import CorruptData

EMPTY_LIST = "[]"


def encode(values: Iterable[str]) -> Json:
    """Wrap a list of strings for binding into a JSONB column."""
    return Json(list(values))


def decode(raw: Any, column: str = "list") -> list[str]:
    """
    Decode a list column value fetched from the database.

    psycopg2 already parses JSONB into Python objects, but a TEXT or JSON
    column (or a driver without the JSON typecaster) hands back a string.

    Returns:
        The list of strings in stored order. ``None`` or an empty string
        decode to an empty list.

    Raises:
        CorruptData: If the value is not a JSON array of strings.
    """
    if raw is None:
        return []
    if isinstance(raw, (bytes, bytearray, memoryview)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptData(f"Column '{column}' is not valid UTF-8: {e}") from e
    if isinstance(raw, str):
        if not raw.strip():
            return []
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise CorruptData(f"Column '{column}' holds invalid JSON: {e}") from e
    if not isinstance(raw, list):
        raise CorruptData(f"Column '{column}' is not a JSON array: {type(raw).__name__}")
    for item in raw:
        if not isinstance(item, str):
            raise CorruptData(f"Column '{column}' contains a non-string item: {item!r}")
    return list(raw)


def append_expression(column: str) -> SetExpression:
    """SET fragment appending one bound string to a JSONB list column."""
    return SetExpression(
        f"{column} = COALESCE({column}, '{EMPTY_LIST}'::jsonb) || jsonb_build_array({PLACEHOLDER}::text)",
        params=1,
    )
