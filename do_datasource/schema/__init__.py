"""
Schema Module

Declarative attribute schemas and the output store data sources write into.
"""

from .types import Resource, Schema, SchemaType, ValidateFunc
from .resource_data import ResourceData, unique_id
from .validation import no_zero_values

__all__ = [
    "Resource",
    "Schema",
    "SchemaType",
    "ValidateFunc",
    "ResourceData",
    "unique_id",
    "no_zero_values",
]
