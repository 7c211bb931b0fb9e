"""
Resource Data

The output store a read function writes into. Values are checked against the
Resource schema on every set(); a value of the wrong shape raises
SchemaValidationError and leaves the store untouched.
"""

import threading
from datetime import datetime, timezone
from itertools import count
from typing import Any, Dict, Optional

from ..errors import SchemaValidationError
from .types import Resource, Schema, SchemaType


_id_counter = count(1)
_id_lock = threading.Lock()


def unique_id(prefix: str = "do-") -> str:
    """Generate an opaque id, unique within the process"""
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    with _id_lock:
        n = next(_id_counter)
    return f"{prefix}{timestamp}{n:08d}"


def _zero_value(attr: Schema) -> Any:
    if attr.type == SchemaType.STRING:
        return ""
    if attr.type == SchemaType.INT:
        return 0
    if attr.type == SchemaType.FLOAT:
        return 0.0
    if attr.type == SchemaType.BOOL:
        return False
    if attr.type == SchemaType.SET:
        return set()
    return []


def coerce_value(attr: Schema, value: Any, path: str) -> Any:
    """Check value against attr and return its normalized form"""
    if attr.type == SchemaType.STRING:
        if not isinstance(value, str):
            raise SchemaValidationError(f"{path}: expected string, got {type(value).__name__}")
        return value

    if attr.type == SchemaType.INT:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SchemaValidationError(f"{path}: expected int, got {type(value).__name__}")
        return value

    if attr.type == SchemaType.FLOAT:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SchemaValidationError(f"{path}: expected float, got {type(value).__name__}")
        return float(value)

    if attr.type == SchemaType.BOOL:
        if not isinstance(value, bool):
            raise SchemaValidationError(f"{path}: expected bool, got {type(value).__name__}")
        return value

    if value is None:
        return _zero_value(attr)
    if isinstance(value, (str, bytes, dict)) or not hasattr(value, "__iter__"):
        raise SchemaValidationError(f"{path}: expected {attr.type.value}, got {type(value).__name__}")

    items = [_coerce_elem(attr.elem, item, f"{path}.{i}") for i, item in enumerate(value)]

    if attr.type == SchemaType.SET:
        return set(items)
    return items


def _coerce_elem(elem: Any, value: Any, path: str) -> Any:
    if elem is None:
        return value
    if isinstance(elem, Resource):
        return _coerce_record(elem, value, path)
    return coerce_value(elem, value, path)


def _coerce_record(resource: Resource, value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaValidationError(f"{path}: expected a record, got {type(value).__name__}")

    record: Dict[str, Any] = {}
    for key, item in value.items():
        attr = resource.schema.get(key)
        if attr is None:
            raise SchemaValidationError(f"{path}: unknown key {key!r}")
        # Keys absent from value stay absent in the record
        record[key] = coerce_value(attr, item, f"{path}.{key}")
    return record


def _render(value: Any) -> Any:
    """Make a stored value JSON friendly"""
    if isinstance(value, set):
        return sorted(_render(v) for v in value)
    if isinstance(value, list):
        return [_render(v) for v in value]
    if isinstance(value, dict):
        return {k: _render(v) for k, v in value.items()}
    return value


class ResourceData:
    """
    Configuration and computed state for one invocation of a data source.

    get() reads computed state first, then configuration, then falls back to
    the attribute's zero value.
    """

    def __init__(self, resource: Resource, config: Optional[Dict[str, Any]] = None):
        self._resource = resource
        self._config: Dict[str, Any] = dict(config or {})
        self._state: Dict[str, Any] = {}
        self._id = ""

    @property
    def resource(self) -> Resource:
        return self._resource

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str) -> None:
        self._id = value

    def get(self, key: str) -> Any:
        attr = self._resource.schema.get(key)
        if attr is None:
            raise KeyError(f"Invalid address to get: {key!r}")
        if key in self._state:
            return self._state[key]
        if key in self._config:
            return self._config[key]
        return _zero_value(attr)

    def set(self, key: str, value: Any) -> None:
        """
        Store a computed value.

        Raises:
            SchemaValidationError: If key is unknown or value has the wrong shape
        """
        attr = self._resource.schema.get(key)
        if attr is None:
            raise SchemaValidationError(f"Invalid address to set: {key!r}")
        self._state[key] = coerce_value(attr, value, key)

    def state(self) -> Dict[str, Any]:
        """Snapshot of id, inputs and computed values as plain data"""
        result: Dict[str, Any] = {"id": self._id}
        result.update(_render(self._config))
        result.update(_render(self._state))
        return result
