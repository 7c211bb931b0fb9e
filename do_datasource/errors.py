"""
Error Types

Every failure of a lookup is fatal; there is no partial-success mode.
Callers catch DataSourceError to handle all of them at once.
"""

from typing import Optional


class DataSourceError(Exception):
    """Base class for all data source errors"""


class ConfigError(DataSourceError):
    """Missing or malformed client configuration"""


class DigitalOceanApiError(DataSourceError):
    """Error returned by (or while talking to) the DigitalOcean API"""

    def __init__(self, status: int, message: str, request_id: Optional[str] = None, url: str = ""):
        self.status = status
        self.message = message
        self.request_id = request_id
        self.url = url
        detail = f"GET {url}: {status}" if url else f"{status}"
        if request_id:
            detail += f' (request "{request_id}")'
        super().__init__(f"{detail} {message}")


class PageParseError(DataSourceError):
    """The pagination links of a response could not be parsed"""


class DropletsLookupError(DataSourceError):
    """Fetching the droplets for a tag failed"""


class SchemaValidationError(DataSourceError):
    """A value does not match the declared schema"""
