"""
Object utilities for hashing and JSON serialization.

Used to build stable keys for filter criteria and to render request payloads
and selection state in log lines.
"""

import hashlib
import json
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from typing import Any


class HashResult:
    """Wrapper around a sha256 digest that provides hexdigest()."""

    def __init__(self, data: bytes) -> None:
        self._hash = hashlib.sha256(data)

    def hexdigest(self) -> str:
        """Return the hexadecimal digest of the hash."""
        return self._hash.hexdigest()


def hash(obj: Any) -> HashResult:
    """
    Create a stable hash of an object or list of objects.

    Objects are serialized to JSON with sorted keys before hashing so equal
    values produce equal digests across sessions.

    Args:
        obj: Any object supported by to_json().

    Returns:
        HashResult instance with hexdigest() method.
    """
    json_str = json.dumps(obj, sort_keys=True, default=_default_serializer)
    return HashResult(json_str.encode("utf-8"))


def to_json(obj: Any, indent: int | None = None) -> str:
    """
    Serialize an object to JSON string.

    Handles dataclasses, dates, enums and sets. Falls back to str() for
    anything else that is not JSON serializable.

    Args:
        obj: Object to serialize.
        indent: Optional indentation for pretty printing.

    Returns:
        JSON string representation.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    return json.dumps(obj, default=_default_serializer, indent=indent)


def _default_serializer(obj: Any) -> Any:
    """Default serializer for types that json cannot encode natively."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "__dict__"):
        return obj.__dict__
    return str(obj)
