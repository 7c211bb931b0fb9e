"""
Droplets data source.

Looks up every droplet carrying a tag and exposes them as a list of flat
records under the "droplets" attribute.

Flow:
    list_by_tag page 1, 2, ... until the links report the last page
    flatten each droplet into a DropletRecord
    set a fresh id and store the records

Any failure aborts the whole lookup and nothing is stored.
"""

import ipaddress
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Set

from loguru import logger

from ..digitalocean import Droplet, IDropletsClient, ListOptions
from ..errors import DropletsLookupError, PageParseError
from ..schema import Resource, ResourceData, Schema, SchemaType, no_zero_values, unique_id
from .tags import flatten_tags, tags_data_source_schema


PER_PAGE = 200

DROPLET_FEATURES = ("backups", "ipv6", "private_networking", "monitoring")


def _computed(schema_type: SchemaType, description: str) -> Schema:
    return Schema(type=schema_type, computed=True, description=description)


def droplet_record_schema() -> Dict[str, Schema]:
    return {
        "name": _computed(SchemaType.STRING, "name of the droplet"),
        "urn": _computed(SchemaType.STRING, "the uniform resource name for the Droplet"),
        "region": _computed(SchemaType.STRING, "the region that the droplet instance is deployed in"),
        "image": _computed(SchemaType.STRING, "the image id or slug of the Droplet"),
        "size": _computed(SchemaType.STRING, "the current size of the Droplet"),
        "disk": _computed(SchemaType.INT, "the size of the droplets disk in gigabytes"),
        "vcpus": _computed(SchemaType.INT, "the number of virtual cpus"),
        "memory": _computed(SchemaType.INT, "memory of the droplet in megabytes"),
        "price_hourly": _computed(SchemaType.FLOAT, "the droplets hourly price"),
        "price_monthly": _computed(SchemaType.FLOAT, "the droplets monthly price"),
        "status": _computed(SchemaType.STRING, "state of the droplet instance"),
        "locked": _computed(SchemaType.BOOL, "whether the droplet has been locked"),
        "ipv4_address": _computed(SchemaType.STRING, "the droplets public ipv4 address"),
        "ipv4_address_private": _computed(SchemaType.STRING, "the droplets private ipv4 address"),
        "ipv6_address": _computed(SchemaType.STRING, "the droplets public ipv6 address"),
        "ipv6_address_private": _computed(SchemaType.STRING, "the droplets private ipv6 address"),
        "backups": _computed(SchemaType.BOOL, "whether the droplet has backups enabled"),
        "ipv6": _computed(SchemaType.BOOL, "whether the droplet has ipv6 enabled"),
        "private_networking": _computed(SchemaType.BOOL, "whether the droplet has private networking enabled"),
        "monitoring": _computed(SchemaType.BOOL, "whether the droplet has monitoring enabled"),
        "volume_ids": Schema(
            type=SchemaType.SET,
            elem=Schema(type=SchemaType.STRING),
            computed=True,
            description="list of volumes attached to the droplet",
        ),
        "tags": tags_data_source_schema(),
    }


def data_source_digitalocean_droplets() -> Resource:
    return Resource(
        read=data_source_digitalocean_droplets_read,
        description="List of droplets carrying a tag",
        schema={
            "tag": Schema(
                type=SchemaType.STRING,
                required=True,
                description="tag associated to the droplets",
                validate_func=no_zero_values,
            ),
            "droplets": Schema(
                type=SchemaType.LIST,
                computed=True,
                description="List of droplet that match the tag",
                elem=Resource(schema=droplet_record_schema()),
            ),
        },
    )


@dataclass
class DropletRecord:
    """
    Flattened droplet.

    Optional fields are None when the droplet does not supply them and are
    left out of to_dict() entirely.
    """
    name: str
    urn: str
    region: str
    image: str
    size: str
    disk: int
    vcpus: int
    memory: int
    price_hourly: float
    price_monthly: float
    status: str
    locked: bool
    volume_ids: Set[str] = field(default_factory=set)
    tags: Set[str] = field(default_factory=set)
    ipv4_address: Optional[str] = None
    ipv4_address_private: Optional[str] = None
    ipv6_address: Optional[str] = None
    ipv6_address_private: Optional[str] = None
    backups: Optional[bool] = None
    ipv6: Optional[bool] = None
    private_networking: Optional[bool] = None
    monitoring: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


def find_ipv4_addr_by_type(droplet: Droplet, addr_type: str) -> str:
    for v4 in droplet.networks.v4:
        if v4.type != addr_type:
            continue
        try:
            ipaddress.ip_address(v4.ip_address)
        except ValueError:
            continue
        return v4.ip_address
    return ""


def find_ipv6_addr_by_type(droplet: Droplet, addr_type: str) -> str:
    for v6 in droplet.networks.v6:
        if v6.type != addr_type:
            continue
        try:
            ipaddress.ip_address(v6.ip_address)
        except ValueError:
            continue
        return v6.ip_address
    return ""


def flatten_droplet_volume_ids(volume_ids: Optional[List[str]]) -> Set[str]:
    return {str(v) for v in volume_ids or []}


def flatten_droplet(droplet: Droplet) -> DropletRecord:
    record = DropletRecord(
        name=droplet.name,
        urn=droplet.urn(),
        region=droplet.region.slug,
        image=droplet.image.slug or str(droplet.image.id),
        size=droplet.size.slug,
        disk=droplet.disk,
        vcpus=droplet.vcpus,
        memory=droplet.memory,
        price_hourly=droplet.size.price_hourly,
        price_monthly=droplet.size.price_monthly,
        status=droplet.status,
        locked=droplet.locked,
        volume_ids=flatten_droplet_volume_ids(droplet.volume_ids),
        tags=flatten_tags(droplet.tags),
    )

    public_ipv4 = find_ipv4_addr_by_type(droplet, "public")
    if public_ipv4:
        record.ipv4_address = public_ipv4

    private_ipv4 = find_ipv4_addr_by_type(droplet, "private")
    if private_ipv4:
        record.ipv4_address_private = private_ipv4

    public_ipv6 = find_ipv6_addr_by_type(droplet, "public")
    if public_ipv6:
        record.ipv6_address = public_ipv6.lower()

    private_ipv6 = find_ipv6_addr_by_type(droplet, "private")
    if private_ipv6:
        record.ipv6_address_private = private_ipv6.lower()

    if droplet.features is not None:
        for feature in DROPLET_FEATURES:
            setattr(record, feature, feature in droplet.features)

    return record


def fetch_droplets_by_tag(client: IDropletsClient, tag: str) -> List[Droplet]:
    """
    Fetch every page of droplets carrying tag.

    Pages are requested one after another; the next page number comes from
    the previous response.

    Raises:
        DropletsLookupError: If any page request fails or its links cannot be parsed
    """
    opts = ListOptions(page=1, per_page=PER_PAGE)
    droplet_list: List[Droplet] = []
    reported_total: Optional[int] = None

    while True:
        try:
            droplets, resp = client.list_by_tag(tag, opts)
        except Exception as e:
            raise DropletsLookupError(f"Error retrieving droplets: {e}") from e

        droplet_list.extend(droplets)
        logger.debug(f"Page {opts.page}: {len(droplets)} droplets")
        if resp.meta is not None:
            reported_total = resp.meta.total

        if resp.links is None or resp.links.is_last_page():
            break

        try:
            page = resp.links.current_page()
        except PageParseError as e:
            raise DropletsLookupError(f"Error retrieving droplets: {e}") from e

        opts.page = page + 1

    if reported_total is None:
        logger.info(f"Found {len(droplet_list)} droplets")
    else:
        logger.info(f"Found {len(droplet_list)} droplets (API reports {reported_total})")

    return droplet_list


def data_source_digitalocean_droplets_read(d: ResourceData, client: IDropletsClient) -> None:
    tag = d.get("tag")

    with logger.contextualize(tag=tag):
        droplets = fetch_droplets_by_tag(client, tag)

        records = [flatten_droplet(droplet).to_dict() for droplet in droplets]

    d.set_id(unique_id())
    d.set("droplets", records)
