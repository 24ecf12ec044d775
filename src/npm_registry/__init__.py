"""read-only client for the npm registry HTTP API."""
__version__ = "0.1.0"

from .config import BASE_URL
from .domain.errors import DecodeError, RegistryError, RequestBuildError, TransportError
from .domain.models import (
    Dist,
    Package,
    PackageTime,
    Person,
    RegistryMetadata,
    Repository,
    VersionRecord,
)
from .registry.aio import AsyncNPMRegistry
from .registry.client import RegistryClient
from .registry.npm import NPMRegistry

__all__ = [
    "BASE_URL",
    "AsyncNPMRegistry",
    "NPMRegistry",
    "RegistryClient",
    "RegistryError",
    "RequestBuildError",
    "TransportError",
    "DecodeError",
    "RegistryMetadata",
    "Package",
    "VersionRecord",
    "Person",
    "Repository",
    "Dist",
    "PackageTime",
]
