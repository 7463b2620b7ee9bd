from __future__ import annotations

import re

from ..core.constants import CYCLE_ID_PATTERN
from ..core.exceptions import ValidationError

_CYCLE_RE = re.compile(CYCLE_ID_PATTERN)


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is invalid")
    return value.strip()


def require_entity_id(value, field_name: str) -> str:
    """Ids are opaque strings; ints coming from JSON are accepted as-is."""

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is invalid")
    if isinstance(value, int):
        return str(value)
    return require_non_empty(value, field_name)


def require_cycle_id(value: str) -> str:
    cycle_id = require_non_empty(value, "Cycle")
    if not _CYCLE_RE.match(cycle_id):
        raise ValidationError(f"Cycle '{cycle_id}' is invalid (expected YYYY.N)")
    return cycle_id
