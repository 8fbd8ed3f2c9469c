from __future__ import annotations

import io
import json
import re
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

KEY = "test-key"

UPLOAD_BODY: Dict[str, Any] = {
    "success": True,
    "files": [{"hash": "abc", "name": None, "size": 42, "url": "/abc.png"}],
}


class RecordingAdapter(BaseAdapter):
    """Transport adapter that records prepared requests and answers from a script."""

    def __init__(
        self,
        status: int = 200,
        body: bytes = b"",
        headers: Optional[Dict[str, str]] = None,
        exc: Optional[Exception] = None,
    ) -> None:
        super().__init__()
        self.status = status
        self.body = body
        self.headers = headers or {}
        self.exc = exc
        self.requests: List[requests.PreparedRequest] = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc

        resp = requests.Response()
        resp.status_code = self.status
        resp.headers = CaseInsensitiveDict(self.headers)
        resp.raw = io.BytesIO(self.body)
        resp.encoding = get_encoding_from_headers(resp.headers)
        resp.url = request.url
        resp.request = request
        return resp

    def close(self) -> None:
        pass


def make_session(adapter: RecordingAdapter) -> requests.Session:
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def query_of(url: str) -> Dict[str, List[str]]:
    return parse_qs(urlsplit(str(url)).query)


def multipart_parts(request: requests.PreparedRequest) -> List[Dict[str, Any]]:
    """Split a multipart/form-data body into [{name, filename, content}]."""
    boundary = request.headers["Content-Type"].split("boundary=")[1].encode()
    parts = []
    for chunk in request.body.split(b"--" + boundary)[1:-1]:
        head, content = chunk[2:-2].split(b"\r\n\r\n", 1)
        head_text = head.decode()
        name = re.search(r'name="([^"]*)"', head_text).group(1)
        filename = re.search(r'filename="([^"]*)"', head_text)
        parts.append({
            "name": name,
            "filename": filename.group(1) if filename else None,
            "content": content,
        })
    return parts


@pytest.fixture
def upload_adapter() -> RecordingAdapter:
    return RecordingAdapter(
        body=json.dumps(UPLOAD_BODY).encode(),
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def shorten_adapter() -> RecordingAdapter:
    return RecordingAdapter(
        body=b"https://awau.moe/x/AbC",
        headers={"Content-Type": "text/plain; charset=utf-8"},
    )


class RecordingTransport:
    """Builds an httpx.MockTransport and keeps every request it saw."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._handler = handler

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))
