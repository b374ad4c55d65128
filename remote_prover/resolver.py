"""
Service endpoint resolution and address-pinned HTTP client.

The proof service host is resolved exactly once, when the prover is
constructed. Every request made through the resulting client connects to
one of those addresses, so DNS changes during a session are never observed.
Picking up new addresses requires building a new client.
"""

import logging
import socket
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

import httpx

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"https": 443, "http": 80}


@dataclass(frozen=True)
class ServiceEndpoint:
    scheme: str
    host: str
    port: int
    addresses: tuple[str, ...]
    base_url: str


def resolve_service_endpoint(url: str) -> ServiceEndpoint:
    """
    Parse the service base URL and resolve its host once.

    Args:
        url: Proof service base URL, e.g. "https://prover.example.com"

    Returns:
        ServiceEndpoint with the pinned address set, in resolution order

    Raises:
        ConfigurationError: If the URL is malformed or resolves to no addresses
    """
    if not url:
        raise ConfigurationError("Proof service URL is not set")

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise ConfigurationError(f"Malformed proof service URL: {url}") from e

    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        raise ConfigurationError(
            f"Unsupported scheme in proof service URL: {url}",
            details={"url": url, "scheme": parts.scheme},
        )
    host = parts.hostname
    if not host:
        raise ConfigurationError(
            f"Proof service URL has no host: {url}", details={"url": url}
        )
    port = port or DEFAULT_PORTS[scheme]

    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except socket.gaierror as e:
        raise ConfigurationError(
            f"Could not resolve proof service host {host}: {e}",
            details={"host": host, "port": port},
        ) from e

    addresses: list[str] = []
    for _family, _type, _proto, _canonname, sockaddr in infos:
        address = sockaddr[0]
        if address not in addresses:
            addresses.append(address)

    if not addresses:
        raise ConfigurationError(
            f"Proof service host {host} resolved to no addresses",
            details={"host": host, "port": port},
        )

    logger.info(f"Resolved proof service {host}:{port} to {addresses}")
    return ServiceEndpoint(
        scheme=scheme,
        host=host,
        port=port,
        addresses=tuple(addresses),
        base_url=url.rstrip("/"),
    )


class PinnedAddressTransport(httpx.AsyncBaseTransport):
    """
    Transport that sends requests for the endpoint host to its pinned addresses.

    The Host header and TLS server name keep the original host name. Addresses
    are tried in order; the next one is used only if the connection is refused.
    Requests for any other host pass through untouched.
    """

    def __init__(
        self,
        endpoint: ServiceEndpoint,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._endpoint = endpoint
        self._transport = transport or httpx.AsyncHTTPTransport()

    def _pin(self, request: httpx.Request, address: str) -> httpx.Request:
        return httpx.Request(
            request.method,
            request.url.copy_with(host=address),
            headers=request.headers,
            stream=request.stream,
            extensions={**request.extensions, "sni_hostname": self._endpoint.host},
        )

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if request.url.host != self._endpoint.host:
            return await self._transport.handle_async_request(request)

        last_error: Optional[httpx.ConnectError] = None
        for address in self._endpoint.addresses:
            try:
                return await self._transport.handle_async_request(
                    self._pin(request, address)
                )
            except httpx.ConnectError as e:
                logger.warning(
                    f"Connection to {self._endpoint.host} via {address} failed: {e}"
                )
                last_error = e
        if last_error is not None:
            raise last_error
        raise httpx.ConnectError(
            f"No pinned addresses for {self._endpoint.host}", request=request
        )

    async def aclose(self) -> None:
        await self._transport.aclose()


def build_pinned_client(
    endpoint: ServiceEndpoint,
    api_key: Optional[str] = None,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Build an HTTP client that always connects to the endpoint's pinned addresses.

    Args:
        endpoint: Resolved service endpoint
        api_key: Optional bearer token added to every request
        timeout: Per-request timeout in seconds
        transport: Inner transport (defaults to httpx.AsyncHTTPTransport)
    """
    headers = {"Accept": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return httpx.AsyncClient(
        base_url=endpoint.base_url,
        headers=headers,
        timeout=timeout,
        transport=PinnedAddressTransport(endpoint, transport),
    )
