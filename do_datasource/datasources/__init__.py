"""
Data Sources Module

Read-only lookups that populate a ResourceData from the DigitalOcean API.
"""

from .droplets import (
    DropletRecord,
    data_source_digitalocean_droplets,
    data_source_digitalocean_droplets_read,
    fetch_droplets_by_tag,
    flatten_droplet,
)
from .tags import flatten_tags, tags_data_source_schema

__all__ = [
    "DropletRecord",
    "data_source_digitalocean_droplets",
    "data_source_digitalocean_droplets_read",
    "fetch_droplets_by_tag",
    "flatten_droplet",
    "flatten_tags",
    "tags_data_source_schema",
]
