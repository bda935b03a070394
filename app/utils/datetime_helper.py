"""Date/time parsing helpers"""
import math
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

_NUMERIC_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_datetime_adapter = TypeAdapter(datetime)


def ensure_utc(dt: datetime) -> datetime:
    """
    Attach UTC to naive datetimes and convert aware ones to UTC

    Args:
        dt: datetime with or without tzinfo

    Returns:
        UTC datetime (timezone.utc)
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def from_epoch_millis(value: int | float) -> datetime:
    """Convert milliseconds since the Unix epoch to a UTC datetime

    Raises:
        ValueError: value is not finite or outside the representable range
    """
    try:
        value = float(value)
    except OverflowError as e:
        raise ValueError(f"epoch value out of range: {value}") from e

    if not math.isfinite(value):
        raise ValueError("epoch value must be finite")
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError) as e:
        raise ValueError(f"epoch value out of range: {value}") from e


def parse_datetime(value: Any) -> datetime:
    """
    Parse a loosely typed instant into a UTC datetime

    Accepts:
    - datetime objects
    - int/float milliseconds since the epoch
    - numeric strings (always epoch milliseconds, never seconds)
    - ISO 8601 / RFC 3339 strings, including a bare YYYY-MM-DD
    - RFC 2822 strings ("Tue, 01 Jan 2030 00:00:00 GMT")

    Raises:
        ValueError: the value cannot be read as an instant
    """
    if isinstance(value, datetime):
        return ensure_utc(value)

    # bool is an int subclass but never a timestamp
    if isinstance(value, bool):
        raise ValueError("boolean is not a date")

    if isinstance(value, (int, float)):
        return from_epoch_millis(value)

    if not isinstance(value, str):
        raise ValueError(f"unsupported date type: {type(value).__name__}")

    text = value.strip()
    if _NUMERIC_PATTERN.match(text):
        return from_epoch_millis(float(text))

    try:
        return ensure_utc(_datetime_adapter.validate_python(text))
    except PydanticValidationError:
        pass

    try:
        return ensure_utc(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError) as e:
        raise ValueError(f"unparseable date: {value!r}") from e
