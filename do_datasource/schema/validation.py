"""Reusable attribute validators."""

from typing import Any, List


def no_zero_values(value: Any, key: str) -> List[str]:
    """Reject empty strings, zero numbers, False and None"""
    if value is None or value == "" or value is False or (isinstance(value, (int, float)) and value == 0):
        return [f'"{key}" must not be empty, got {value!r}']
    return []
