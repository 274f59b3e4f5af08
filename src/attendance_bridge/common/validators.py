from __future__ import annotations

import re
from datetime import date

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def require_iso_date(value: str | None, field_name: str = "date") -> date:
    if not value or not _ISO_DATE.match(str(value)):
        raise ValidationError(f"Invalid {field_name} format. Use YYYY-MM-DD")
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value}")


def require_port(value) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid port: {value!r}")
    if not 0 < port < 65536:
        raise ValidationError(f"Invalid port: {port}")
    return port


def require_json_object(data) -> dict:
    """An absent or unparseable body counts as empty; any other non-object is rejected."""

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
