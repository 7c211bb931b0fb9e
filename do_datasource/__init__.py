"""
DigitalOcean Droplets Data Source

Looks up every droplet carrying a tag and flattens them into plain records
for a declarative configuration engine.

Usage:
    from do_datasource import DigitalOceanClient, ResourceData, data_source_digitalocean_droplets

    resource = data_source_digitalocean_droplets()
    d = ResourceData(resource, {"tag": "web"})
    resource.read(d, DigitalOceanClient.load_from_env())
    print(d.get("droplets"))

CLI:
    python -m do_datasource --tag web
"""

__version__ = "0.1.0"

from .errors import (
    DataSourceError,
    ConfigError,
    DigitalOceanApiError,
    PageParseError,
    DropletsLookupError,
    SchemaValidationError,
)

from .schema import Resource, ResourceData, Schema, SchemaType, unique_id

from .digitalocean import (
    DigitalOceanClient,
    Droplet,
    IDropletsClient,
    ListOptions,
)

from .datasources import (
    DropletRecord,
    data_source_digitalocean_droplets,
    flatten_droplet,
)

from .configs import ClientConfig, DataSourceConfig, load_config

__all__ = [
    "__version__",
    # Errors
    "DataSourceError",
    "ConfigError",
    "DigitalOceanApiError",
    "PageParseError",
    "DropletsLookupError",
    "SchemaValidationError",
    # Schema
    "Resource",
    "ResourceData",
    "Schema",
    "SchemaType",
    "unique_id",
    # Client
    "DigitalOceanClient",
    "Droplet",
    "IDropletsClient",
    "ListOptions",
    # Data sources
    "DropletRecord",
    "data_source_digitalocean_droplets",
    "flatten_droplet",
    # Config
    "ClientConfig",
    "DataSourceConfig",
    "load_config",
]
