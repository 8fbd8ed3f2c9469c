"""
The requester contract shared by both bridges.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

from owo.models import FileUploadResponse

if TYPE_CHECKING:
    from owo.connectors.httpx_bridge import PendingResponse
    from owo.connectors.payloads import Payload


class Requester(ABC):
    """
    Blocking interface: any implementation needs to provide
    .upload_file(), .upload_files() and .shorten_url().
    """

    @abstractmethod
    def upload_file(self, key: str, payload: "Payload") -> FileUploadResponse:
        """
        Upload a single file as one ``files[]`` part.
        Returns the decoded upload response or raises an OwoError.
        """
        raise NotImplementedError

    @abstractmethod
    def upload_files(self, key: str, payloads: Sequence["Payload"]) -> FileUploadResponse:
        """
        Upload up to MAX_FILES files in one multipart request.
        Raises TooManyFilesError, without sending anything, when given more.
        """
        raise NotImplementedError

    @abstractmethod
    def shorten_url(self, key: str, url: str) -> str:
        """
        Shorten a URL. Returns the response body (the short URL) verbatim.
        """
        raise NotImplementedError


class AsyncRequester(ABC):
    """
    Event-loop interface. Only URL shortening is offered here; uploads are
    available on the blocking bridge only.
    """

    @abstractmethod
    def shorten_url(self, key: str, url: str) -> "PendingResponse":
        """
        Build the shorten request and return it unsent.
        Raises InvalidUriError if the request target does not parse.
        Awaiting the returned handle performs the request.
        """
        raise NotImplementedError
