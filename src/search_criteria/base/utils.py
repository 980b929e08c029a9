# src/search_criteria/base/utils.py
import logging
import re
from dataclasses import asdict, is_dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Reserved query-syntax tokens. Multi-character operators are matched first
# so that "&&" becomes "\&\&" rather than two unrelated single escapes.
_RESERVED_PATTERN = re.compile(r'&&|\|\||["+\-!(){}\[\]^~*?:\\]')


def escape_criteria_value(value: str) -> str:
    """
    Escape every reserved query-syntax character in ``value``.

    Each character of a reserved token (``" + - && || ! ( ) { } [ ] ^ ~ * ? : \\``)
    is prefixed with a backslash, in a single pass over the input.
    """
    return _RESERVED_PATTERN.sub(
        lambda match: "".join(f"\\{char}" for char in match.group(0)), value
    )


def _format_datetime(value: datetime) -> str:
    if value.tzinfo is None:
        return value.isoformat(timespec="milliseconds")
    as_utc = value.astimezone(timezone.utc)
    return as_utc.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def prepare_for_request(data: Any) -> Any:
    """
    Recursively convert Pydantic models, dataclasses, and special types to values
    that can be embedded in a search request.

    It handles:
    - Pydantic BaseModel instances (dumped in JSON mode, using field aliases)
    - Python dataclasses
    - Dictionaries (processing values recursively)
    - Lists, tuples and sets (processing each item)
    - Enums (replaced by their value)
    - datetimes (ISO-8601 with milliseconds, ``Z`` suffix when timezone-aware)
      and dates
    - Pydantic URL types (converting to strings)

    Args:
        data: The data to convert

    Returns:
        The converted data
    """
    if data is None:
        return None

    if is_dataclass(data) and not isinstance(data, type):
        return prepare_for_request(asdict(data))

    if isinstance(data, BaseModel):
        serialized = data.model_dump(mode="json", by_alias=True)
        logger.debug(f"Serialized {type(data).__name__} model for request")
        return prepare_for_request(serialized)

    if isinstance(data, Enum):
        return prepare_for_request(data.value)

    if isinstance(data, datetime):
        return _format_datetime(data)

    if isinstance(data, date):
        return data.isoformat()

    if isinstance(data, dict):
        return {k: prepare_for_request(v) for k, v in data.items()}

    if isinstance(data, list):
        return [prepare_for_request(item) for item in data]

    if isinstance(data, tuple):
        return tuple(prepare_for_request(item) for item in data)

    if isinstance(data, (set, frozenset)):
        return [prepare_for_request(item) for item in data]

    # Pydantic URL types
    if data.__class__.__module__ in ("pydantic.networks", "pydantic_core._pydantic_core"):
        return str(data)

    return data
