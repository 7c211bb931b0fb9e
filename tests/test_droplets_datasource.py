from typing import Any, List, Optional, Tuple

import pytest
from loguru import logger

from do_datasource.datasources import (
    data_source_digitalocean_droplets,
    data_source_digitalocean_droplets_read,
    fetch_droplets_by_tag,
    flatten_droplet,
    flatten_tags,
)
from do_datasource.digitalocean import (
    Droplet,
    IDropletsClient,
    Image,
    Links,
    ListOptions,
    Meta,
    Networks,
    NetworkV4,
    NetworkV6,
    Pages,
    Region,
    Response,
    Size,
)
from do_datasource.errors import DigitalOceanApiError, DropletsLookupError, SchemaValidationError
from do_datasource.schema import ResourceData


PAGE_URL = "https://api.digitalocean.com/v2/droplets?per_page=200&tag_name=web&page={}"


def _mk_droplet(
    *,
    droplet_id: int = 1,
    image_slug: str = "ubuntu-20-04",
    image_id: int = 0,
    v4: Optional[List[NetworkV4]] = None,
    v6: Optional[List[NetworkV6]] = None,
    features: Optional[List[str]] = None,
    volume_ids: Optional[List[str]] = None,
    tags: Optional[List[str]] = None,
) -> Droplet:
    return Droplet(
        id=droplet_id,
        name=f"web-{droplet_id}",
        memory=1024,
        vcpus=1,
        disk=25,
        region=Region(slug="nyc3"),
        image=Image(id=image_id, slug=image_slug),
        size=Size(slug="s-1vcpu-1gb", price_hourly=0.00744, price_monthly=5.0),
        status="active",
        locked=False,
        networks=Networks(v4=v4 or [], v6=v6 or []),
        features=features,
        volume_ids=volume_ids or [],
        tags=tags or [],
    )


def _page_response(page: int, total_pages: int) -> Response:
    pages = Pages()
    if page > 1:
        pages.prev = PAGE_URL.format(page - 1)
    if page < total_pages:
        pages.next = PAGE_URL.format(page + 1)
    return Response(status_code=200, links=Links(pages=pages))


class _FakeClient(IDropletsClient):
    """Serves pages of droplets; a page given as an Exception is raised."""

    def __init__(self, pages: List[Any]):
        self._pages = pages
        self.requested: List[Tuple[str, int, int]] = []

    def list_by_tag(self, tag: str, opts: ListOptions):
        self.requested.append((tag, opts.page, opts.per_page))
        page = self._pages[opts.page - 1]
        if isinstance(page, Exception):
            raise page
        return list(page), _page_response(opts.page, len(self._pages))


class _SpyResourceData(ResourceData):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.set_calls: List[str] = []

    def set(self, key, value):
        self.set_calls.append(key)
        super().set(key, value)


def _resource_data(tag: str = "web") -> _SpyResourceData:
    return _SpyResourceData(data_source_digitalocean_droplets(), {"tag": tag})


# ---- flattening ----

def test_image_uses_slug_when_present():
    record = flatten_droplet(_mk_droplet(image_slug="ubuntu-20-04", image_id=42)).to_dict()
    assert record["image"] == "ubuntu-20-04"


def test_image_falls_back_to_numeric_id():
    record = flatten_droplet(_mk_droplet(image_slug="", image_id=12345)).to_dict()
    assert record["image"] == "12345"


def test_scalar_fields_and_urn():
    record = flatten_droplet(_mk_droplet(droplet_id=99)).to_dict()
    assert record["name"] == "web-99"
    assert record["urn"] == "do:droplet:99"
    assert record["region"] == "nyc3"
    assert record["size"] == "s-1vcpu-1gb"
    assert record["disk"] == 25
    assert record["vcpus"] == 1
    assert record["memory"] == 1024
    assert record["price_hourly"] == 0.00744
    assert record["price_monthly"] == 5.0
    assert record["status"] == "active"
    assert record["locked"] is False


def test_addresses_pick_first_match_per_family_and_scope():
    droplet = _mk_droplet(
        v4=[
            NetworkV4(ip_address="10.10.0.5", type="private"),
            NetworkV4(ip_address="203.0.113.7", type="public"),
            NetworkV4(ip_address="203.0.113.8", type="public"),
        ],
        v6=[
            NetworkV6(ip_address="2604:A880:0800:0010:0000:0000:00D5:E001", type="public"),
            NetworkV6(ip_address="FD00::1", type="private"),
        ],
    )
    record = flatten_droplet(droplet).to_dict()

    assert record["ipv4_address"] == "203.0.113.7"
    assert record["ipv4_address_private"] == "10.10.0.5"
    assert record["ipv6_address"] == "2604:a880:0800:0010:0000:0000:00d5:e001"
    assert record["ipv6_address_private"] == "fd00::1"


def test_addresses_are_returned_as_sent_apart_from_case():
    droplet = _mk_droplet(
        v4=[NetworkV4(ip_address="010.000.000.001", type="public"), NetworkV4(ip_address="192.0.2.10", type="public")],
        v6=[NetworkV6(ip_address="192.0.2.20", type="public"), NetworkV6(ip_address="FD00:0:0:0:0:0:0:1", type="private")],
    )
    record = flatten_droplet(droplet).to_dict()

    assert record["ipv4_address"] == "192.0.2.10"
    assert record["ipv6_address"] == "192.0.2.20"
    assert record["ipv6_address_private"] == "fd00:0:0:0:0:0:0:1"


def test_missing_addresses_are_omitted_not_empty():
    record = flatten_droplet(_mk_droplet(v4=[NetworkV4(ip_address="10.0.0.2", type="private")])).to_dict()

    assert record["ipv4_address_private"] == "10.0.0.2"
    for key in ("ipv4_address", "ipv6_address", "ipv6_address_private"):
        assert key not in record


def test_unparseable_address_is_skipped():
    droplet = _mk_droplet(v4=[
        NetworkV4(ip_address="", type="public"),
        NetworkV4(ip_address="198.51.100.4", type="public"),
    ])
    assert flatten_droplet(droplet).to_dict()["ipv4_address"] == "198.51.100.4"


def test_null_feature_list_omits_all_flags():
    record = flatten_droplet(_mk_droplet(features=None)).to_dict()
    for key in ("backups", "ipv6", "private_networking", "monitoring"):
        assert key not in record


def test_feature_flags_reflect_membership():
    record = flatten_droplet(_mk_droplet(features=["backups", "monitoring", "virtio"])).to_dict()
    assert record["backups"] is True
    assert record["monitoring"] is True
    assert record["ipv6"] is False
    assert record["private_networking"] is False


def test_empty_feature_list_sets_all_flags_false():
    record = flatten_droplet(_mk_droplet(features=[])).to_dict()
    assert [record[k] for k in ("backups", "ipv6", "private_networking", "monitoring")] == [False] * 4


def test_volume_ids_and_tags_collapse_duplicates():
    record = flatten_droplet(_mk_droplet(volume_ids=["v1", "v2", "v1"], tags=["web", "web", "prod"])).to_dict()
    assert record["volume_ids"] == {"v1", "v2"}
    assert record["tags"] == {"web", "prod"}


def test_flatten_tags_handles_none():
    assert flatten_tags(None) == set()


# ---- pagination ----

def test_zero_droplets_produce_empty_list():
    client = _FakeClient([[]])
    d = _resource_data()

    data_source_digitalocean_droplets_read(d, client)

    assert d.get("droplets") == []
    assert d.id != ""
    assert client.requested == [("web", 1, 200)]


def test_fetches_every_page_until_last():
    pages = [
        [_mk_droplet(droplet_id=1), _mk_droplet(droplet_id=2)],
        [_mk_droplet(droplet_id=3)],
        [_mk_droplet(droplet_id=4), _mk_droplet(droplet_id=5)],
    ]
    client = _FakeClient(pages)

    droplets = fetch_droplets_by_tag(client, "web")

    assert [page for _, page, _ in client.requested] == [1, 2, 3]
    assert [d.id for d in droplets] == [1, 2, 3, 4, 5]


def test_response_without_links_stops_after_first_page():
    class _NoLinksClient(_FakeClient):
        def list_by_tag(self, tag, opts):
            droplets, _ = super().list_by_tag(tag, opts)
            return droplets, Response(status_code=200, links=None)

    client = _NoLinksClient([[_mk_droplet()], [_mk_droplet(droplet_id=2)]])

    assert len(fetch_droplets_by_tag(client, "web")) == 1
    assert len(client.requested) == 1


def test_error_on_second_page_commits_nothing():
    api_error = DigitalOceanApiError(500, "Server Error")
    client = _FakeClient([[_mk_droplet()], api_error, [_mk_droplet(droplet_id=3)]])
    d = _resource_data()

    with pytest.raises(DropletsLookupError) as exc_info:
        data_source_digitalocean_droplets_read(d, client)

    assert str(exc_info.value).startswith("Error retrieving droplets: ")
    assert exc_info.value.__cause__ is api_error
    assert len(client.requested) == 2
    assert d.set_calls == []
    assert d.id == ""


def test_malformed_current_page_is_fatal():
    class _BadLinksClient(_FakeClient):
        def list_by_tag(self, tag, opts):
            droplets, _ = super().list_by_tag(tag, opts)
            pages = Pages(prev="https://api.digitalocean.com/v2/droplets?page=x", next=PAGE_URL.format(3))
            return droplets, Response(status_code=200, links=Links(pages=pages))

    client = _BadLinksClient([[_mk_droplet()], [_mk_droplet(droplet_id=2)]])
    d = _resource_data()

    with pytest.raises(DropletsLookupError):
        data_source_digitalocean_droplets_read(d, client)
    assert d.set_calls == []


def test_store_error_propagates_unchanged():
    class _FailingStore(_SpyResourceData):
        def set(self, key, value):
            raise SchemaValidationError("droplets.0.disk: expected int, got str")

    d = _FailingStore(data_source_digitalocean_droplets(), {"tag": "web"})

    with pytest.raises(SchemaValidationError, match="expected int"):
        data_source_digitalocean_droplets_read(d, _FakeClient([[_mk_droplet()]]))


def test_logs_total_reported_by_api():
    class _MetaClient(_FakeClient):
        def list_by_tag(self, tag, opts):
            droplets, resp = super().list_by_tag(tag, opts)
            resp.meta = Meta(total=3)
            return droplets, resp

    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="INFO")
    try:
        fetch_droplets_by_tag(_MetaClient([[_mk_droplet()], [_mk_droplet(droplet_id=2), _mk_droplet(droplet_id=3)]]), "web")
    finally:
        logger.remove(handler_id)

    assert "Found 3 droplets (API reports 3)" in messages


# ---- end to end ----

def test_web_tag_scenario():
    first = _mk_droplet(
        droplet_id=1,
        image_slug="ubuntu-20-04",
        v4=[NetworkV4(ip_address="10.0.0.1", type="public")],
    )
    second = _mk_droplet(droplet_id=2, image_slug="", image_id=12345)
    client = _FakeClient([[first, second]])

    resource = data_source_digitalocean_droplets()
    d = ResourceData(resource, {"tag": "web"})
    resource.read(d, client)

    records = d.get("droplets")
    assert len(records) == 2
    assert records[0]["image"] == "ubuntu-20-04"
    assert records[0]["ipv4_address"] == "10.0.0.1"
    assert records[1]["image"] == "12345"
    assert "ipv4_address" not in records[1]


def test_each_read_gets_a_fresh_id():
    resource = data_source_digitalocean_droplets()
    d1 = ResourceData(resource, {"tag": "web"})
    d2 = ResourceData(resource, {"tag": "web"})

    resource.read(d1, _FakeClient([[]]))
    resource.read(d2, _FakeClient([[]]))

    assert d1.id and d2.id and d1.id != d2.id
