"""
Blocking bridge built on `requests`.

Responsibilities:
- Build multipart upload bodies in memory (no temp files)
- Send uploads and shorten requests through a requests.Session
- Map transport failures, error statuses and bad bodies to OwoError
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import requests
from requests.exceptions import RequestException

from owo.config import settings
from owo.connectors.payloads import Part, Payload, build_parts
from owo.connectors.requester import Requester
from owo.constants import USER_AGENT
from owo.models import FileUploadResponse, parse_upload_response
from owo.utils.decorators import log_call
from owo.utils.exceptions import HttpStatusError, TransportError
from owo.utils.urls import build_shorten_url, build_upload_url
from owo.utils.validators import validate_file_count

BRIDGE = "requests"


class RequestsRequester(Requester):
    """
    A concrete Requester implementation that uses `requests`.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        timeout: Optional[float] = None,
        api_root: Optional[str] = None,
    ) -> None:
        """
        Parameters
        ----------
        session : Optional[requests.Session]
            Session to send requests through; a new one when omitted.
        timeout : Optional[float]
            Per-request timeout in seconds (defaults to settings.TIMEOUT_SECONDS).
        api_root : Optional[str]
            Service base URL (defaults to settings.API_ROOT).
        """
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout if timeout is not None else settings.TIMEOUT_SECONDS
        self._api_root = api_root

    @property
    def session(self) -> requests.Session:
        return self._session

    @log_call(BRIDGE, "upload_file")
    def upload_file(self, key: str, payload: Payload) -> FileUploadResponse:
        return self._upload(key, build_parts([payload]))

    @log_call(BRIDGE, "upload_files")
    def upload_files(self, key: str, payloads: Sequence[Payload]) -> FileUploadResponse:
        payloads = list(payloads)
        validate_file_count(payloads)
        return self._upload(key, build_parts(payloads))

    @log_call(BRIDGE, "shorten_url")
    def shorten_url(self, key: str, url: str) -> str:
        resp = self._send("GET", build_shorten_url(key, url, self._api_root))
        return _body_text(resp)

    def _upload(self, key: str, parts: Sequence[Part]) -> FileUploadResponse:
        resp = self._send("POST", build_upload_url(key, self._api_root), files=list(parts))
        return parse_upload_response(resp.content)

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            resp = self._session.request(
                method,
                url,
                headers={"User-Agent": USER_AGENT},
                timeout=self._timeout,
                **kwargs,
            )
        except RequestException as e:
            raise TransportError(f"HTTP {method} failed: {e}", bridge=BRIDGE) from e

        if not 200 <= resp.status_code < 300:
            raise HttpStatusError(resp.status_code, _body_text(resp), bridge=BRIDGE)
        return resp


def _body_text(resp: requests.Response) -> str:
    # Bodies without a declared charset are UTF-8.
    content_type = resp.headers.get("Content-Type", "")
    encoding = resp.encoding if "charset=" in content_type.lower() and resp.encoding else "utf-8"
    return resp.content.decode(encoding, errors="replace")


class OwoClient:
    """
    Pairs a requests.Session with a service key.

    The session is closed by close() only when this client created it.
    """

    def __init__(
        self,
        key: str,
        session: Optional[requests.Session] = None,
        *,
        timeout: Optional[float] = None,
        api_root: Optional[str] = None,
    ) -> None:
        self.key = key
        self._owns_session = session is None
        self._requester = RequestsRequester(session, timeout=timeout, api_root=api_root)

    @property
    def requester(self) -> RequestsRequester:
        return self._requester

    def upload_file(self, payload: Payload) -> FileUploadResponse:
        return self._requester.upload_file(self.key, payload)

    def upload_files(self, payloads: Sequence[Payload]) -> FileUploadResponse:
        return self._requester.upload_files(self.key, payloads)

    def shorten_url(self, url: str) -> str:
        return self._requester.shorten_url(self.key, url)

    def close(self) -> None:
        if self._owns_session:
            self._requester.session.close()

    def __enter__(self) -> "OwoClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
