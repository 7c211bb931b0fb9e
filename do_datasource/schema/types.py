"""
Schema Type Definitions

Static descriptions of data source inputs and outputs. A Resource is a map of
attribute name to Schema plus the function that reads it; nothing here talks
to the network.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union


class SchemaType(str, Enum):
    """Value types an attribute can hold"""
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    LIST = "list"
    SET = "set"


# (value, key) -> list of error messages, empty when valid
ValidateFunc = Callable[[Any, str], List[str]]


@dataclass
class Schema:
    """Description of a single attribute"""
    type: SchemaType
    required: bool = False
    optional: bool = False
    # Set by the read function rather than by the user
    computed: bool = False
    description: str = ""
    # Element type for LIST and SET: a Schema for primitives, a Resource for records
    elem: Optional[Union["Schema", "Resource"]] = None
    validate_func: Optional[ValidateFunc] = None


@dataclass
class Resource:
    """
    A data source: its attribute schema and its read function.

    read is called as read(resource_data, client) and either populates the
    computed attributes or raises.
    """
    schema: Dict[str, Schema] = field(default_factory=dict)
    read: Optional[Callable[..., None]] = None
    description: str = ""

    def validate(self, config: Dict[str, Any]) -> List[str]:
        """
        Validate user supplied configuration against the schema.

        Args:
            config: Input attribute values keyed by name

        Returns:
            List of error messages, empty when the configuration is valid
        """
        from ..errors import SchemaValidationError
        from .resource_data import coerce_value

        errors: List[str] = []

        for key in config:
            if key not in self.schema:
                errors.append(f'"{key}": not a valid attribute')

        for key, attr in self.schema.items():
            if key not in config:
                if attr.required:
                    errors.append(f'"{key}": required field is not set')
                continue

            if attr.computed and not (attr.required or attr.optional):
                errors.append(f'"{key}": computed attributes cannot be set')
                continue

            try:
                coerce_value(attr, config[key], key)
            except SchemaValidationError as e:
                errors.append(str(e))
                continue

            if attr.validate_func is not None:
                errors.extend(attr.validate_func(config[key], key))

        return errors
