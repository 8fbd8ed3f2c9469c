"""
One-call helpers that build a client, make a single request and close it.

Prefer a long-lived OwoClient / AsyncOwoClient when making several calls.
"""

from __future__ import annotations

from typing import Sequence

from owo.connectors.httpx_bridge import AsyncOwoClient
from owo.connectors.payloads import Payload
from owo.connectors.requests_bridge import OwoClient
from owo.models import FileUploadResponse


def upload_file(key: str, payload: Payload) -> FileUploadResponse:
    with OwoClient(key) as client:
        return client.upload_file(payload)


def upload_files(key: str, payloads: Sequence[Payload]) -> FileUploadResponse:
    with OwoClient(key) as client:
        return client.upload_files(payloads)


def shorten_url(key: str, url: str) -> str:
    with OwoClient(key) as client:
        return client.shorten_url(url)


async def async_shorten_url(key: str, url: str) -> str:
    """Shorten through the httpx bridge and return the drained body."""
    async with AsyncOwoClient(key) as client:
        return await client.shorten_url(url).text()
