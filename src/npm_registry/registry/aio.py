import logging
from typing import Optional, Tuple, Type

import httpx

from .npm import ModelT, build_request, decode_response, package_path, read_error, send_error
from ..config import BASE_URL, DEFAULT_HEADERS, DEFAULT_TIMEOUT
from ..domain.models import Package, RegistryMetadata

logger = logging.getLogger(__name__)


class AsyncNPMRegistry:
    """
    asyncio counterpart of `NPMRegistry`.

    cancelling the task awaiting a call aborts the in-flight request;
    `asyncio.CancelledError` is never wrapped.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = BASE_URL
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=DEFAULT_HEADERS,
            timeout=timeout,
            transport=transport,
        )

    async def get_meta(self, timeout: Optional[float] = None) -> Tuple[RegistryMetadata, httpx.Response]:
        return await self._get("/", RegistryMetadata, timeout)

    async def get_package(self, package_name: str, timeout: Optional[float] = None) -> Tuple[Package, httpx.Response]:
        return await self._get(package_path(package_name), Package, timeout)

    async def get_package_version(
        self, package_name: str, version: str, timeout: Optional[float] = None
    ) -> Tuple[Package, httpx.Response]:
        return await self._get(package_path(package_name, version), Package, timeout)

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self) -> "AsyncNPMRegistry":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def _get(self, path: str, model: Type[ModelT], timeout: Optional[float]) -> Tuple[ModelT, httpx.Response]:
        request = build_request(self.client, path, timeout)

        logger.debug(f"GET {request.url}")
        try:
            response = await self.client.send(request, stream=True)
        except httpx.TransportError as e:
            raise send_error(request, e) from e

        try:
            await response.aread()
        except httpx.HTTPError as e:
            raise read_error(response, e) from e
        finally:
            await response.aclose()

        return decode_response(response, model), response
