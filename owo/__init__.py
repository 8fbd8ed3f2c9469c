"""
Client for the whats-this file host and URL shortener.

Usage:
    from owo import OwoClient, AsyncOwoClient

    with OwoClient(key) as client:
        client.upload_files([b"...", Path("cat.png")])

    async with AsyncOwoClient(key) as client:
        short = await client.shorten_url("https://example.com").text()
"""

from .constants import MAX_FILES, USER_AGENT, VERSION
from .models import FileUploadResponse, UploadedFile
from .connectors.requester import AsyncRequester, Requester
from .connectors.requests_bridge import OwoClient, RequestsRequester
from .connectors.httpx_bridge import AsyncOwoClient, HttpxRequester, PendingResponse
from .utils.exceptions import (
    HttpStatusError,
    InvalidUriError,
    JsonDecodeError,
    NoFilesError,
    OwoError,
    OwoIOError,
    TlsSetupError,
    TooManyFilesError,
    TransportError,
)

__version__ = VERSION

__all__ = [
    "MAX_FILES",
    "USER_AGENT",
    "FileUploadResponse",
    "UploadedFile",
    "Requester",
    "AsyncRequester",
    "RequestsRequester",
    "OwoClient",
    "HttpxRequester",
    "AsyncOwoClient",
    "PendingResponse",
    "OwoError",
    "OwoIOError",
    "JsonDecodeError",
    "TlsSetupError",
    "TransportError",
    "HttpStatusError",
    "TooManyFilesError",
    "NoFilesError",
    "InvalidUriError",
]
