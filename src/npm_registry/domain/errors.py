from typing import Optional

import httpx


class RegistryError(Exception):
    """base class for exceptions raised by the registry client."""
    stage = "unknown"

    def __init__(self, message: str, response: Optional[httpx.Response] = None):
        self.response = response
        super().__init__(message)

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None


class RequestBuildError(RegistryError):
    """raised when the request cannot be constructed."""
    stage = "request"


class TransportError(RegistryError):
    """raised when the request fails on the wire (dns, connect, tls, timeout)."""
    stage = "network"


class DecodeError(RegistryError):
    """raised when the response body cannot be read or decoded into the target model."""

    def __init__(self, message: str, response: httpx.Response, stage: str = "decode"):
        self.stage = stage
        super().__init__(message, response)
