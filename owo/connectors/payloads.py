"""
Normalisation of upload payloads into multipart parts.

A payload may be:
- raw bytes (sent with the default filename),
- a ``(filename, bytes)`` tuple,
- a path to a local file (read fully; the basename is the filename).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from owo.constants import DEFAULT_CONTENT_TYPE, DEFAULT_FILENAME, UPLOAD_FIELD
from owo.utils.exceptions import OwoIOError

Payload = Union[bytes, bytearray, memoryview, Tuple[str, bytes], "os.PathLike[str]"]
Part = Tuple[str, Tuple[str, bytes, str]]


def read_payload(payload: Payload) -> Tuple[str, bytes]:
    """Return ``(filename, content)`` for a single payload."""
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return DEFAULT_FILENAME, bytes(payload)

    if isinstance(payload, tuple):
        filename, content = payload
        return filename, bytes(content)

    if isinstance(payload, os.PathLike):
        path = Path(payload)
        try:
            return path.name, path.read_bytes()
        except OSError as exc:
            raise OwoIOError(
                f"Unable to read {path}: {exc.strerror or exc}",
                details={"path": str(path)},
            ) from exc

    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")


def build_parts(payloads: Sequence[Payload]) -> List[Part]:
    """One ``files[]`` part per payload, in input order."""
    parts: List[Part] = []
    for payload in payloads:
        filename, content = read_payload(payload)
        parts.append((UPLOAD_FIELD, (filename, content, DEFAULT_CONTENT_TYPE)))
    return parts
