import logging
from typing import Optional, Tuple, Type, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .client import RegistryClient
from ..config import BASE_URL, DEFAULT_HEADERS, DEFAULT_TIMEOUT
from ..domain.errors import DecodeError, RegistryError, RequestBuildError, TransportError
from ..domain.models import Package, RegistryMetadata, RegistryModel

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=RegistryModel)


def package_path(package_name: str, version: Optional[str] = None) -> str:
    """
    build the request path for a package or one of its versions.

    segments are percent-encoded; `@` is kept so that a scoped name such as
    `@types/node` becomes `@types%2Fnode`, the form the registry routes.
    """
    path = "/" + quote(package_name, safe="@")
    if version is not None:
        path += "/" + quote(version, safe="")
    return path


def build_request(
    client: Union[httpx.Client, httpx.AsyncClient], path: str, timeout: Optional[float]
) -> httpx.Request:
    try:
        return client.build_request(
            "GET", path, timeout=httpx.USE_CLIENT_DEFAULT if timeout is None else timeout
        )
    except (httpx.InvalidURL, ValueError) as e:
        raise RequestBuildError(f"could not build request for {path!r}: {e}") from e


def send_error(request: httpx.Request, exc: httpx.TransportError) -> TransportError:
    return TransportError(f"GET {request.url} failed: {exc}")


def read_error(response: httpx.Response, exc: httpx.HTTPError) -> RegistryError:
    """map a failure while reading the body; timeouts stay transport errors."""
    if isinstance(exc, httpx.TimeoutException):
        return TransportError(f"GET {response.request.url} timed out reading the body: {exc}", response)
    return DecodeError(f"could not read body of {response.request.url}: {exc}", response, stage="read")


def decode_response(response: httpx.Response, model: Type[ModelT]) -> ModelT:
    """decode a fully read response body into `model`; the status code is not consulted."""
    logger.debug(f"GET {response.request.url} -> {response.status_code} ({len(response.content)} bytes)")
    try:
        return model.model_validate_json(response.content)
    except ValidationError as e:
        raise DecodeError(
            f"could not decode {model.__name__} from {response.request.url} "
            f"(status {response.status_code}): {e}",
            response,
        ) from e


class NPMRegistry(RegistryClient):
    """
    read-only client for the npm registry.

    args:
        transport: replaces the object that executes requests, e.g. an
            `httpx.MockTransport` or a record/replay transport in tests
        timeout: default timeout in seconds for every call
    """

    def __init__(self, transport: Optional[httpx.BaseTransport] = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = BASE_URL
        self.client = httpx.Client(
            base_url=self.base_url,
            headers=DEFAULT_HEADERS,
            timeout=timeout,
            transport=transport,
        )

    def get_meta(self, timeout: Optional[float] = None) -> Tuple[RegistryMetadata, httpx.Response]:
        return self._get("/", RegistryMetadata, timeout)

    def get_package(self, package_name: str, timeout: Optional[float] = None) -> Tuple[Package, httpx.Response]:
        return self._get(package_path(package_name), Package, timeout)

    def get_package_version(
        self, package_name: str, version: str, timeout: Optional[float] = None
    ) -> Tuple[Package, httpx.Response]:
        return self._get(package_path(package_name, version), Package, timeout)

    def close(self):
        self.client.close()

    def __enter__(self) -> "NPMRegistry":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _get(self, path: str, model: Type[ModelT], timeout: Optional[float]) -> Tuple[ModelT, httpx.Response]:
        request = build_request(self.client, path, timeout)

        logger.debug(f"GET {request.url}")
        try:
            response = self.client.send(request, stream=True)
        except httpx.TransportError as e:
            raise send_error(request, e) from e

        try:
            response.read()
        except httpx.HTTPError as e:
            raise read_error(response, e) from e
        finally:
            response.close()

        return decode_response(response, model), response
