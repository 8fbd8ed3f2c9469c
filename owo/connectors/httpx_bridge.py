"""
Event-loop bridge built on `httpx.AsyncClient`.

Responsibilities:
- Build the SSL context used by the async client
- Build shorten requests without sending them
- Send and stream them when the caller awaits the pending response

Uploads are not offered on this bridge; use the requests bridge for them.
"""

from __future__ import annotations

import asyncio
import ssl
from typing import Any, AsyncIterator, Generator, Optional

import certifi
import httpx

from owo.config import settings
from owo.connectors.requester import AsyncRequester
from owo.constants import USER_AGENT
from owo.utils.decorators import log_call
from owo.utils.exceptions import HttpStatusError, InvalidUriError, TlsSetupError, TransportError
from owo.utils.urls import build_shorten_url

BRIDGE = "httpx"


def build_tls_context(ca_bundle: Optional[str] = None) -> ssl.SSLContext:
    """
    Build the SSL context for an AsyncClient.

    Parameters
    ----------
    ca_bundle : Optional[str]
        CA bundle path. Falls back to settings.CA_BUNDLE, then certifi.

    Raises
    ------
    TlsSetupError
        If the bundle cannot be read or parsed.
    """
    cafile = ca_bundle or settings.CA_BUNDLE or certifi.where()
    try:
        return ssl.create_default_context(cafile=cafile)
    except OSError as exc:  # ssl.SSLError included
        raise TlsSetupError(
            f"Unable to load CA bundle {cafile}: {exc}",
            details={"ca_bundle": cafile},
        ) from exc


class PendingResponse:
    """
    A built shorten request that has not been sent yet.

    ``await pending`` sends it and returns the streaming httpx.Response.
    read(), text() and aiter_bytes() send (if needed) and drain the body,
    closing the response afterwards.
    """

    def __init__(self, client: httpx.AsyncClient, request: httpx.Request) -> None:
        self._client = client
        self._request = request
        self._sending: Optional["asyncio.Task[httpx.Response]"] = None

    @property
    def request(self) -> httpx.Request:
        return self._request

    def __await__(self) -> Generator[Any, None, httpx.Response]:
        return self.send().__await__()

    async def send(self) -> httpx.Response:
        # Concurrent and repeated awaits share one task and its outcome.
        if self._sending is None:
            self._sending = asyncio.ensure_future(self._dispatch())
        return await self._sending

    @log_call(BRIDGE, "shorten_url")
    async def _dispatch(self) -> httpx.Response:
        try:
            response = await self._client.send(self._request, stream=True)
        except httpx.HTTPError as exc:
            raise TransportError(f"HTTP GET failed: {exc}", bridge=BRIDGE) from exc

        if not response.is_success:
            try:
                await response.aread()
                body = response.text
            except httpx.HTTPError:
                body = ""
            finally:
                await response.aclose()
            raise HttpStatusError(response.status_code, body, bridge=BRIDGE)

        return response

    async def aiter_bytes(self) -> AsyncIterator[bytes]:
        response = await self.send()
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as exc:
            raise TransportError(f"Reading response body failed: {exc}", bridge=BRIDGE) from exc
        finally:
            await response.aclose()

    async def read(self) -> bytes:
        response = await self.send()
        try:
            return await response.aread()
        except httpx.HTTPError as exc:
            raise TransportError(f"Reading response body failed: {exc}", bridge=BRIDGE) from exc
        finally:
            await response.aclose()

    async def text(self) -> str:
        """Drain the body and return it verbatim as text (the short URL)."""
        response = await self.send()
        await self.read()
        return response.text

    async def aclose(self) -> None:
        if self._sending is None:
            return
        if not self._sending.done():
            self._sending.cancel()
            return
        if not self._sending.cancelled() and self._sending.exception() is None:
            await self._sending.result().aclose()


class HttpxRequester(AsyncRequester):
    """
    A concrete AsyncRequester implementation that uses `httpx`.
    """

    def __init__(self, client: httpx.AsyncClient, *, api_root: Optional[str] = None) -> None:
        self._client = client
        self._api_root = api_root

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    @log_call(BRIDGE, "build_request")
    def shorten_url(self, key: str, url: str) -> PendingResponse:
        target = build_shorten_url(key, url, self._api_root)
        try:
            request = self._client.build_request(
                "GET",
                target,
                headers={"User-Agent": USER_AGENT},
            )
        except httpx.InvalidURL as exc:
            raise InvalidUriError(f"Invalid request target: {exc}") from exc
        return PendingResponse(self._client, request)


class AsyncOwoClient:
    """
    Pairs an httpx.AsyncClient with a service key.

    When no client is given one is created with a fresh SSL context, which
    may raise TlsSetupError. Only a client created here is closed by aclose().
    """

    def __init__(
        self,
        key: str,
        client: Optional[httpx.AsyncClient] = None,
        *,
        ca_bundle: Optional[str] = None,
        timeout: Optional[float] = None,
        api_root: Optional[str] = None,
    ) -> None:
        self.key = key
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                verify=build_tls_context(ca_bundle),
                timeout=timeout if timeout is not None else settings.TIMEOUT_SECONDS,
            )
        self._requester = HttpxRequester(client, api_root=api_root)

    @property
    def requester(self) -> HttpxRequester:
        return self._requester

    def shorten_url(self, url: str) -> PendingResponse:
        return self._requester.shorten_url(self.key, url)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._requester.client.aclose()

    async def __aenter__(self) -> "AsyncOwoClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
