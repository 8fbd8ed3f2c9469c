"""
Error code registry for the owo client.

Each code has:
- code (OWO-<AREA>-NNNN)
- description
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ErrorInfo:
    code: str
    description: str


class ErrorCodes:
    IO = "OWO-IO-0001"
    JSON = "OWO-JSON-0001"
    TLS_SETUP = "OWO-TLS-0001"
    TRANSPORT = "OWO-HTTP-0001"
    HTTP_STATUS = "OWO-HTTP-0002"
    TOO_MANY_FILES = "OWO-VAL-0001"
    NO_FILES = "OWO-VAL-0002"
    INVALID_URI = "OWO-URI-0001"
    UNKNOWN = "OWO-GEN-0001"


_REGISTRY: Dict[str, ErrorInfo] = {
    # Local I/O
    ErrorCodes.IO: ErrorInfo(ErrorCodes.IO, "Local input/output failure"),

    # Decoding
    ErrorCodes.JSON: ErrorInfo(ErrorCodes.JSON, "Response body does not match the expected schema"),

    # Transport
    ErrorCodes.TLS_SETUP: ErrorInfo(ErrorCodes.TLS_SETUP, "Unable to build the secure transport"),
    ErrorCodes.TRANSPORT: ErrorInfo(ErrorCodes.TRANSPORT, "HTTP request failed"),
    ErrorCodes.HTTP_STATUS: ErrorInfo(ErrorCodes.HTTP_STATUS, "Service returned an error status"),

    # Validation
    ErrorCodes.TOO_MANY_FILES: ErrorInfo(ErrorCodes.TOO_MANY_FILES, "Too many files to upload"),
    ErrorCodes.NO_FILES: ErrorInfo(ErrorCodes.NO_FILES, "No files to upload"),
    ErrorCodes.INVALID_URI: ErrorInfo(ErrorCodes.INVALID_URI, "Request target is not a valid URI"),
}


def get_error_info(code: str) -> ErrorInfo:
    """Return ErrorInfo for a given code, or a generic one if not registered."""
    return _REGISTRY.get(
        code,
        ErrorInfo(code=code, description="Unknown owo error code"),
    )
