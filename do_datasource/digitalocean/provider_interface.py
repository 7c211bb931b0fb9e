from abc import ABC, abstractmethod
from typing import List, Tuple

from .types import Droplet, ListOptions, Response


class IDropletsClient(ABC):
    @abstractmethod
    def list_by_tag(self, tag: str, opts: ListOptions) -> Tuple[List[Droplet], Response]:
        ...
