from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing required field: {field_name}")
    return value.strip()


def require_iso_date(value: Any, field_name: str) -> str:
    value = require_non_empty(value, field_name)
    try:
        parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name} format. Use YYYY-MM-DD")
    return value


def require_hhmm(value: Any, field_name: str) -> str:
    value = require_non_empty(value, field_name)
    if not _TIME_RE.match(value):
        raise ValidationError(f"Invalid {field_name} format. Use HH:MM")
    try:
        datetime.strptime(value, "%H:%M")
    except ValueError:
        raise ValidationError(f"Invalid {field_name} format. Use HH:MM")
    return value


def optional_email(value: Any) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        return ""
    if not isinstance(value, str) or not _EMAIL_RE.match(value.strip()):
        raise ValidationError("Invalid email format")
    return value.strip()


def optional_capacity(value: Any) -> Optional[int]:
    """Empty or missing capacity is stored as None; 0 is kept and also means unlimited."""

    if value is None or value == "":
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value.strip())
        else:
            raise ValidationError("Capacity must be a non-negative integer")
    if value < 0:
        raise ValidationError("Capacity must be a non-negative integer")
    return value


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def as_text(value: Any) -> str:
    return "" if value is None else str(value)
