"""
DigitalOcean Module

A small client for the droplets API: wire types, pagination links and the
list-by-tag call.
"""

from .types import (
    Droplet,
    Image,
    ListOptions,
    Meta,
    Networks,
    NetworkV4,
    NetworkV6,
    Rate,
    Region,
    Response,
    Size,
    to_urn,
)
from .links import Links, Pages, page_for_url
from .droplets import list_by_tag
from .provider_interface import IDropletsClient
from .client_factory import DigitalOceanClient

__all__ = [
    # Types
    "Droplet",
    "Image",
    "ListOptions",
    "Meta",
    "Networks",
    "NetworkV4",
    "NetworkV6",
    "Rate",
    "Region",
    "Response",
    "Size",
    "to_urn",
    # Pagination
    "Links",
    "Pages",
    "page_for_url",
    # Client
    "list_by_tag",
    "IDropletsClient",
    "DigitalOceanClient",
]
