from abc import ABC, abstractmethod
from typing import Optional, Tuple

import httpx

from ..domain.models import Package, RegistryMetadata


class RegistryClient(ABC):
    @abstractmethod
    def get_meta(self, timeout: Optional[float] = None) -> Tuple[RegistryMetadata, httpx.Response]:
        """Get registry-wide metadata."""
        pass

    @abstractmethod
    def get_package(self, package_name: str, timeout: Optional[float] = None) -> Tuple[Package, httpx.Response]:
        """Get the full document for a package."""
        pass

    @abstractmethod
    def get_package_version(
        self, package_name: str, version: str, timeout: Optional[float] = None
    ) -> Tuple[Package, httpx.Response]:
        """Get the document for a single published version."""
        pass
