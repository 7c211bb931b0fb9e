from typing import Any, Dict, List, Optional, Tuple

import requests
from loguru import logger

from ..configs import DEFAULT_TIMEOUT_SECONDS
from ..errors import DigitalOceanApiError
from .types import Droplet, ListOptions, Response


DROPLETS_PATH = "/v2/droplets"


def _error_from_response(resp: requests.Response) -> DigitalOceanApiError:
    message = resp.reason or ""
    request_id = resp.headers.get("x-request-id")
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or message
        request_id = body.get("request_id") or request_id
    return DigitalOceanApiError(resp.status_code, message, request_id=request_id, url=resp.url)


def _decode_body(resp: requests.Response) -> Dict[str, Any]:
    try:
        body = resp.json()
    except ValueError as e:
        raise DigitalOceanApiError(resp.status_code, f"invalid JSON body: {e}", url=resp.url) from e
    if not isinstance(body, dict):
        raise DigitalOceanApiError(resp.status_code, "unexpected JSON body", url=resp.url)
    return body


def list_by_tag(
    session: requests.Session,
    base_url: str,
    tag: str,
    opts: Optional[ListOptions] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Tuple[List[Droplet], Response]:
    """
    List one page of droplets carrying tag.

    Raises:
        DigitalOceanApiError: On transport failure, a non-2xx status or an undecodable body
    """
    url = base_url.rstrip("/") + DROPLETS_PATH
    params: Dict[str, Any] = {"tag_name": tag}
    params.update((opts or ListOptions()).to_params())

    logger.debug(f"GET {url} params={params}")
    try:
        resp = session.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise DigitalOceanApiError(0, str(e), url=url) from e

    if not 200 <= resp.status_code < 300:
        raise _error_from_response(resp)

    body = _decode_body(resp)
    droplets = [Droplet.from_dict(d) for d in body.get("droplets") or []]
    response = Response.from_http(resp.status_code, resp.headers, body)

    if response.rate.limit:
        logger.debug(f"Rate limit: {response.rate.remaining}/{response.rate.limit} remaining")

    return droplets, response
