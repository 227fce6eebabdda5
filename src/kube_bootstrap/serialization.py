"""JSON encoding and decoding with date/time support."""

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from pydantic_core import from_json, to_json


@lru_cache(maxsize=128)
def _adapter(into: Any) -> TypeAdapter:
    return TypeAdapter(into)


def dumps(obj: Any) -> bytes:
    """Encode a request body as JSON.

    Besides plain JSON types this handles datetime, date, time, timedelta,
    UUID, Decimal, enums, dataclasses and pydantic models. Datetimes are
    written as ISO 8601 / RFC 3339 strings.

    Raises:
        PydanticSerializationError: If obj contains an unsupported type.
    """
    return to_json(obj, by_alias=True)


def loads(content: bytes | str, into: Any = None) -> Any:
    """Decode a JSON response body.

    Args:
        content: Raw JSON.
        into: Optional target type (pydantic model, ``list[Model]``,
            ``datetime``...). RFC 3339 timestamps are parsed into datetimes
            wherever the target type asks for one.

    Returns:
        Plain Python data, or an instance of ``into``.

    Raises:
        ValueError: If content is not valid JSON.
        pydantic.ValidationError: If content does not match ``into``.
    """
    if into is None:
        return from_json(content)
    return _adapter(into).validate_json(content)
