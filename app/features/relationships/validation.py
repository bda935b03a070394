"""Input normalization for task and user mutations

Every helper takes raw request values (nothing is assumed pre-validated)
and either returns a clean value or raises a domain error.
"""
import uuid
from datetime import datetime
from typing import Any, List, Optional

from app.features.relationships.domain import NotFoundError, ValidationError
from app.utils.datetime_helper import parse_datetime

_TRUE_STRINGS = {"true", "1"}
_FALSE_STRINGS = {"false", "0"}
_NON_SCALAR_TYPES = (dict, list, tuple, set)


def require_scalar(value: Any, message: str) -> Any:
    """Reject objects and arrays where a single text value is expected"""
    if isinstance(value, _NON_SCALAR_TYPES):
        raise ValidationError(message)
    return value


def normalize_text(value: Any) -> str:
    """Stringify and trim; None becomes the empty string"""
    if value is None:
        return ""
    return str(value).strip()


def require_text(value: Any, message: str) -> str:
    text = normalize_text(require_scalar(value, message))
    if not text:
        raise ValidationError(message)
    return text


def parse_deadline(value: Any) -> datetime:
    """Deadline is required and must parse to a valid instant"""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Deadline is required")

    try:
        return parse_datetime(value)
    except ValueError:
        raise ValidationError("Deadline must be a valid date")


def parse_boolean(value: Any, default: bool = False) -> bool:
    """
    Read a loosely typed flag

    True/False pass through; "true"/"1" and "false"/"0" (any case, any
    surrounding whitespace) map to their values; anything else is the default.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value

    normalized = str(value).strip().lower()
    if normalized in _TRUE_STRINGS:
        return True
    if normalized in _FALSE_STRINGS:
        return False
    return default


def parse_identifier(value: Any, message: str) -> str:
    """Return the canonical form of a store key (a UUID)

    Malformed identifiers are reported as not-found: a key that cannot exist
    is indistinguishable from one that does not.
    """
    text = normalize_text(value)
    try:
        return str(uuid.UUID(text))
    except ValueError:
        raise NotFoundError(message)


def parse_optional_identifier(value: Any, message: str) -> Optional[str]:
    """Empty or missing means "no reference"; anything else must be well formed"""
    text = normalize_text(value)
    if not text:
        return None
    return parse_identifier(text, message)


def normalize_pending_tasks(value: Any) -> List[str]:
    """
    Turn a raw pendingTasks value into a de-duplicated list of task ids

    Missing means empty. The result is a set in meaning; first-seen order is
    kept only so responses are stable.

    Raises:
        ValidationError: value is not a list, or an element is empty
    """
    if value is None:
        return []

    if not isinstance(value, (list, tuple)):
        raise ValidationError("pendingTasks must be an array of task identifiers")

    task_ids: List[str] = []
    for item in value:
        task_id = normalize_text(item)
        if not task_id:
            raise ValidationError("pendingTasks cannot contain empty identifiers")
        task_ids.append(task_id)

    return list(dict.fromkeys(task_ids))
