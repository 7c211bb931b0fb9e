from pydantic import BaseModel


DEFAULT_API_ENDPOINT = "https://api.digitalocean.com"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "do-datasource/0.1.0"


class ClientConfig(BaseModel):
    api_endpoint: str = DEFAULT_API_ENDPOINT
    # Per-request timeout, the only bound on how long a page fetch can block
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT


class DataSourceConfig(BaseModel):
    digitalocean: ClientConfig = ClientConfig()
