from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from conftest import KEY, RecordingTransport, query_of
from owo import (
    USER_AGENT,
    AsyncOwoClient,
    HttpStatusError,
    HttpxRequester,
    InvalidUriError,
    PendingResponse,
    TlsSetupError,
    TransportError,
)
from owo.connectors.httpx_bridge import build_tls_context

SHORT = "https://awau.moe/x/AbC"


def short_ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, text=SHORT)


@pytest.mark.asyncio
async def test_shorten_url_is_not_sent_until_awaited():
    transport = RecordingTransport(short_ok)
    async with transport.client() as client:
        pending = HttpxRequester(client).shorten_url(KEY, "https://example.com")

        assert isinstance(pending, PendingResponse)
        assert transport.requests == []

        assert await pending.text() == SHORT

    assert len(transport.requests) == 1


@pytest.mark.asyncio
async def test_shorten_url_request_shape():
    transport = RecordingTransport(short_ok)
    async with transport.client() as client:
        await HttpxRequester(client).shorten_url(KEY, "https://example.com").read()

    request = transport.requests[0]
    assert request.method == "GET"
    assert str(request.url).startswith("https://api.awau.moe/shorten/polr?")
    assert query_of(request.url) == {
        "action": ["shorten"],
        "url": ["https://example.com"],
        "key": [KEY],
    }
    assert request.headers["User-Agent"] == USER_AGENT


@pytest.mark.asyncio
async def test_awaiting_pending_yields_streaming_response():
    transport = RecordingTransport(short_ok)
    async with transport.client() as client:
        pending = HttpxRequester(client).shorten_url(KEY, "https://example.com")

        response = await pending
        chunks = [chunk async for chunk in pending.aiter_bytes()]

    assert response.status_code == 200
    assert b"".join(chunks) == SHORT.encode()
    assert len(transport.requests) == 1


@pytest.mark.asyncio
async def test_error_status_raises_http_status_error():
    transport = RecordingTransport(lambda request: httpx.Response(403, text="forbidden"))
    async with transport.client() as client:
        pending = HttpxRequester(client).shorten_url(KEY, "https://example.com")

        with pytest.raises(HttpStatusError) as exc_info:
            await pending.text()

    assert exc_info.value.status_code == 403
    assert exc_info.value.details["body"] == "forbidden"
    assert exc_info.value.bridge == "httpx"


@pytest.mark.asyncio
async def test_transport_failure_raises_transport_error():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with RecordingTransport(refuse).client() as client:
        pending = HttpxRequester(client).shorten_url(KEY, "https://example.com")

        with pytest.raises(TransportError) as exc_info:
            await pending

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.bridge == "httpx"


@pytest.mark.asyncio
async def test_malformed_target_raises_invalid_uri_without_io():
    transport = RecordingTransport(short_ok)
    async with transport.client() as client:
        requester = HttpxRequester(client, api_root="https://api.awau.moe\x01")

        with pytest.raises(InvalidUriError):
            requester.shorten_url(KEY, "https://example.com")

    assert transport.requests == []


@pytest.mark.asyncio
async def test_plain_text_body_decodes_as_utf8():
    short = "https://awau.moe/x/caf\u00e9"
    transport = RecordingTransport(
        lambda request: httpx.Response(
            200, content=short.encode("utf-8"), headers={"Content-Type": "text/plain"}
        )
    )
    async with transport.client() as client:
        assert await HttpxRequester(client).shorten_url(KEY, "https://example.com").text() == short


@pytest.mark.asyncio
async def test_concurrent_awaits_share_one_request():
    transport = RecordingTransport(short_ok)
    async with transport.client() as client:
        pending = HttpxRequester(client).shorten_url(KEY, "https://example.com")

        first, second = await asyncio.gather(pending.send(), pending.send())
        await pending.aclose()

    assert first is second
    assert len(transport.requests) == 1


@pytest.mark.asyncio
async def test_awaiting_again_after_failure_does_not_resend():
    transport = RecordingTransport(lambda request: httpx.Response(500, text="down"))
    async with transport.client() as client:
        pending = HttpxRequester(client).shorten_url(KEY, "https://example.com")

        for _ in range(2):
            with pytest.raises(HttpStatusError):
                await pending

    assert len(transport.requests) == 1


@pytest.mark.asyncio
async def test_invalid_uri_is_logged_before_raising(caplog):
    async with RecordingTransport(short_ok).client() as client:
        requester = HttpxRequester(client, api_root="https://api.awau.moe\x01")

        with caplog.at_level(logging.WARNING, logger="owo"):
            with pytest.raises(InvalidUriError):
                requester.shorten_url(KEY, "https://example.com")

    [record] = [r for r in caplog.records if r.name == "owo.httpx.build_request"]
    assert record.levelno == logging.WARNING
    assert record.error_code == "OWO-URI-0001"


def test_broken_ca_bundle_raises_tls_setup_error(tmp_path):
    with pytest.raises(TlsSetupError):
        AsyncOwoClient(KEY, ca_bundle=str(tmp_path / "missing.pem"))


def test_garbage_ca_bundle_raises_tls_setup_error(tmp_path):
    bundle = tmp_path / "garbage.pem"
    bundle.write_text("-----BEGIN CERTIFICATE-----\nnot a cert\n-----END CERTIFICATE-----\n")

    with pytest.raises(TlsSetupError) as exc_info:
        build_tls_context(str(bundle))

    assert exc_info.value.details["ca_bundle"] == str(bundle)


def test_default_tls_context_builds():
    assert build_tls_context() is not None


class TestAsyncOwoClient:
    @pytest.mark.asyncio
    async def test_injects_stored_key(self):
        transport = RecordingTransport(short_ok)
        async with AsyncOwoClient(KEY, client=transport.client()) as owo:
            assert await owo.shorten_url("https://example.com").text() == SHORT
            owo.key = "other-key"
            await owo.shorten_url("https://example.com").read()

        keys = [query_of(r.url)["key"] for r in transport.requests]
        assert keys == [[KEY], ["other-key"]]

    @pytest.mark.asyncio
    async def test_leaves_injected_client_open(self):
        client = RecordingTransport(short_ok).client()
        async with AsyncOwoClient(KEY, client=client):
            pass

        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_closes_owned_client(self):
        owo = AsyncOwoClient(KEY)
        await owo.aclose()

        assert owo.requester.client.is_closed
