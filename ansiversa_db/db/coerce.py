"""Lenient value coercion for turning raw rows into typed records.

Every helper is total: bad input falls back to a default instead of raising,
so one malformed row never breaks a read.
"""

import json
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def to_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value)


def to_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def to_int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    if isinstance(value, int):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number)


def to_optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return to_int(value)


def to_bool(value: Any, default: bool = False) -> bool:
    """Native bool, nonzero number, or ``"true"``/``"1"`` in any case."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1")
    return default


def to_timestamp(value: Any) -> str:
    """Keep a stored timestamp string; otherwise use the current UTC time."""
    if isinstance(value, str) and value:
        return value
    return datetime.now(timezone.utc).isoformat()


def _load_json(value: Any, column: str) -> Any:
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str):
        return value
    if not value:
        return None
    try:
        return json.loads(value)
    except ValueError:
        logger.warning("Unparseable JSON in column %s, using empty default", column)
        return None


def parse_json_object(value: Any, column: str = "json") -> Dict[str, Any]:
    parsed = _load_json(value, column)
    return dict(parsed) if isinstance(parsed, dict) else {}


def parse_json_list(value: Any, column: str = "json") -> List[Any]:
    parsed = _load_json(value, column)
    return list(parsed) if isinstance(parsed, (list, tuple)) else []


def to_flag(value: Optional[bool]) -> Optional[int]:
    """Optional bool -> 1/0 for INTEGER flag columns; None stays None."""
    if value is None:
        return None
    return 1 if value else 0


def as_model(model: Type[M], value: Union[M, Mapping[str, Any]]) -> M:
    """Accept either a model instance or a plain mapping for ``model``."""
    if isinstance(value, model):
        return value
    return model.model_validate(dict(value))


def first_present(row: Any, *keys: str) -> Any:
    """First non-null value among ``keys`` (snake_case or camelCase columns)."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None
