"""
DigitalOcean API Types

Typed views over the JSON returned by the droplets endpoints. Only the fields
the data sources read are modelled; everything else is ignored on decode.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .links import Links


def to_urn(resource_type: str, resource_id: Any) -> str:
    """Uniform resource name, e.g. do:droplet:123"""
    return f"do:{resource_type.lower()}:{resource_id}"


@dataclass
class Region:
    slug: str = ""
    name: str = ""
    available: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Region":
        data = data or {}
        return cls(
            slug=data.get("slug") or "",
            name=data.get("name") or "",
            available=bool(data.get("available", False)),
        )


@dataclass
class Image:
    id: int = 0
    name: str = ""
    # Empty for private images and snapshots
    slug: str = ""
    distribution: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Image":
        data = data or {}
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name") or "",
            slug=data.get("slug") or "",
            distribution=data.get("distribution") or "",
        )


@dataclass
class Size:
    slug: str = ""
    memory: int = 0
    vcpus: int = 0
    disk: int = 0
    price_monthly: float = 0.0
    price_hourly: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Size":
        data = data or {}
        return cls(
            slug=data.get("slug") or "",
            memory=int(data.get("memory") or 0),
            vcpus=int(data.get("vcpus") or 0),
            disk=int(data.get("disk") or 0),
            price_monthly=float(data.get("price_monthly") or 0.0),
            price_hourly=float(data.get("price_hourly") or 0.0),
        )


@dataclass
class NetworkV4:
    ip_address: str = ""
    netmask: str = ""
    gateway: str = ""
    # public or private
    type: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NetworkV4":
        return cls(
            ip_address=data.get("ip_address") or "",
            netmask=data.get("netmask") or "",
            gateway=data.get("gateway") or "",
            type=data.get("type") or "",
        )


@dataclass
class NetworkV6:
    ip_address: str = ""
    netmask: int = 0
    gateway: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NetworkV6":
        return cls(
            ip_address=data.get("ip_address") or "",
            netmask=int(data.get("netmask") or 0),
            gateway=data.get("gateway") or "",
            type=data.get("type") or "",
        )


@dataclass
class Networks:
    v4: List[NetworkV4] = field(default_factory=list)
    v6: List[NetworkV6] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Networks":
        data = data or {}
        return cls(
            v4=[NetworkV4.from_dict(n) for n in data.get("v4") or []],
            v6=[NetworkV6.from_dict(n) for n in data.get("v6") or []],
        )


@dataclass
class Droplet:
    """A droplet as returned by the API"""
    id: int
    name: str = ""
    memory: int = 0
    vcpus: int = 0
    disk: int = 0
    region: Region = field(default_factory=Region)
    image: Image = field(default_factory=Image)
    size: Size = field(default_factory=Size)
    size_slug: str = ""
    status: str = ""
    locked: bool = False
    networks: Networks = field(default_factory=Networks)
    # None when the API omits the list, which is not the same as an empty list
    features: Optional[List[str]] = None
    volume_ids: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    created_at: str = ""
    vpc_uuid: str = ""

    def urn(self) -> str:
        return to_urn("Droplet", self.id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Droplet":
        features = data.get("features")
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            memory=int(data.get("memory") or 0),
            vcpus=int(data.get("vcpus") or 0),
            disk=int(data.get("disk") or 0),
            region=Region.from_dict(data.get("region")),
            image=Image.from_dict(data.get("image")),
            size=Size.from_dict(data.get("size")),
            size_slug=data.get("size_slug") or "",
            status=data.get("status") or "",
            locked=bool(data.get("locked", False)),
            networks=Networks.from_dict(data.get("networks")),
            features=list(features) if features is not None else None,
            volume_ids=[str(v) for v in data.get("volume_ids") or []],
            tags=list(data.get("tags") or []),
            created_at=data.get("created_at") or "",
            vpc_uuid=data.get("vpc_uuid") or "",
        )


@dataclass
class ListOptions:
    """Paging parameters for list requests"""
    page: int = 1
    # 0 leaves the page size to the API
    per_page: int = 0

    def to_params(self) -> Dict[str, int]:
        params = {}
        if self.page:
            params["page"] = self.page
        if self.per_page:
            params["per_page"] = self.per_page
        return params


@dataclass
class Meta:
    total: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Meta"]:
        if data is None:
            return None
        return cls(total=int(data.get("total") or 0))


@dataclass
class Rate:
    """Rate limit headers of a response"""
    limit: int = 0
    remaining: int = 0
    # Unix timestamp at which the window resets
    reset: int = 0

    @classmethod
    def from_headers(cls, headers: Any) -> "Rate":
        def _int(name: str) -> int:
            try:
                return int(headers.get(name, 0))
            except (TypeError, ValueError):
                return 0

        return cls(
            limit=_int("RateLimit-Limit"),
            remaining=_int("RateLimit-Remaining"),
            reset=_int("RateLimit-Reset"),
        )


@dataclass
class Response:
    """Metadata of a list response"""
    status_code: int
    links: Optional[Links] = None
    meta: Optional[Meta] = None
    rate: Rate = field(default_factory=Rate)
    request_id: Optional[str] = None

    @classmethod
    def from_http(cls, status_code: int, headers: Any, body: Dict[str, Any]) -> "Response":
        return cls(
            status_code=status_code,
            links=Links.from_dict(body.get("links")),
            meta=Meta.from_dict(body.get("meta")),
            rate=Rate.from_headers(headers),
            request_id=headers.get("x-request-id"),
        )
