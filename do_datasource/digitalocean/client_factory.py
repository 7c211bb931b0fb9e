from dataclasses import dataclass, field
import os
from typing import List, Optional, Tuple

import requests

from ..configs import ClientConfig, DEFAULT_API_ENDPOINT, DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from ..configs.loader import token_from_env
from .droplets import list_by_tag
from .provider_interface import IDropletsClient
from .types import Droplet, ListOptions, Response


@dataclass
class DigitalOceanClient(IDropletsClient):
    token: str
    api_endpoint: str = DEFAULT_API_ENDPOINT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    _session: Optional[requests.Session] = field(default=None, init=False, repr=False)

    @classmethod
    def from_config(cls, token: str, config: ClientConfig) -> 'DigitalOceanClient':
        return DigitalOceanClient(
            token=token,
            api_endpoint=config.api_endpoint,
            timeout_seconds=config.timeout_seconds,
            user_agent=config.user_agent,
        )

    @classmethod
    def load_from_env(cls, config: Optional[ClientConfig] = None) -> 'DigitalOceanClient':
        config = config or ClientConfig()
        api_url = os.environ.get("DIGITALOCEAN_API_URL")
        if api_url:
            config = config.model_copy(update={"api_endpoint": api_url})
        return cls.from_config(token_from_env(), config)

    def build(self) -> requests.Session:
        if self._session is None:
            session = requests.Session()
            session.headers.update({
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/json",
                "User-Agent": self.user_agent,
            })
            self._session = session
        return self._session

    def list_by_tag(self, tag: str, opts: ListOptions) -> Tuple[List[Droplet], Response]:
        return list_by_tag(self.build(), self.api_endpoint, tag, opts, timeout=self.timeout_seconds)
