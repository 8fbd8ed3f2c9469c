"""
Request target construction for the upload and shorten endpoints.

Query values are percent-encoded; the API root is used as given.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from owo.config import settings
from owo.constants import SHORTEN_PATH, UPLOAD_PATH


def _root(api_root: Optional[str]) -> str:
    return (api_root or settings.API_ROOT).rstrip("/")


def build_upload_url(key: str, api_root: Optional[str] = None) -> str:
    """``{root}/upload/pomf?key={key}``"""
    return f"{_root(api_root)}{UPLOAD_PATH}?{urlencode({'key': key})}"


def build_shorten_url(key: str, url: str, api_root: Optional[str] = None) -> str:
    """``{root}/shorten/polr?action=shorten&url={url}&key={key}``"""
    query = urlencode({"action": "shorten", "url": url, "key": key})
    return f"{_root(api_root)}{SHORTEN_PATH}?{query}"
