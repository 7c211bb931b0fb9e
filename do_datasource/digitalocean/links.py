"""
Pagination links.

List responses carry a links.pages object with absolute URLs for the
neighbouring pages. The current page number is not reported directly; it is
derived from the "prev" link.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlparse

from ..errors import PageParseError


def page_for_url(url: str) -> int:
    """Extract the page query parameter of a pagination URL"""
    parsed = urlparse(url)
    if not parsed.scheme and not parsed.path.startswith("/"):
        raise PageParseError(f"invalid pagination URL: {url!r}")

    values = parse_qs(parsed.query).get("page")
    if not values:
        raise PageParseError(f"no page parameter in pagination URL: {url!r}")

    try:
        return int(values[0])
    except ValueError as e:
        raise PageParseError(f"invalid page {values[0]!r} in pagination URL: {url!r}") from e


@dataclass
class Pages:
    first: str = ""
    prev: str = ""
    last: str = ""
    next: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pages":
        return cls(
            first=data.get("first") or "",
            prev=data.get("prev") or "",
            last=data.get("last") or "",
            next=data.get("next") or "",
        )


@dataclass
class Links:
    pages: Optional[Pages] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Links"]:
        if data is None:
            return None
        pages = data.get("pages")
        return cls(pages=Pages.from_dict(pages) if pages is not None else None)

    def is_last_page(self) -> bool:
        return self.pages is None or self.pages.next == ""

    def current_page(self) -> int:
        """
        Page number of the response these links came from.

        Raises:
            PageParseError: If the prev link cannot be parsed
        """
        if self.pages is None or self.pages.prev == "":
            return 1
        return page_for_url(self.pages.prev) + 1
