from typing import Iterable, Optional, Set

from ..schema import Schema, SchemaType


def tags_data_source_schema() -> Schema:
    return Schema(
        type=SchemaType.SET,
        elem=Schema(type=SchemaType.STRING),
        computed=True,
        description="tags applied to the resource",
    )


def flatten_tags(tags: Optional[Iterable[str]]) -> Set[str]:
    return set(tags or [])
