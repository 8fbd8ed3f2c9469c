"""
Exception hierarchy for the owo client.

Every failure raised by either bridge is an OwoError (or subclass) carrying a
registry code. The underlying library exception, when there is one, is chained
as ``__cause__``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from owo.utils.error_codes import ErrorCodes, ErrorInfo, get_error_info


class OwoError(Exception):
    """Base exception for all client errors."""

    default_code: str = ErrorCodes.UNKNOWN

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.info: ErrorInfo = get_error_info(code or self.default_code)
        self.code: str = self.info.code
        self.message: str = message or self.info.description
        self.details: Dict[str, Any] = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class OwoIOError(OwoError):
    """Reading a local payload failed."""

    default_code = ErrorCodes.IO


class JsonDecodeError(OwoError):
    """Response body could not be decoded into the expected model."""

    default_code = ErrorCodes.JSON


class TlsSetupError(OwoError):
    """The SSL context for the async bridge could not be built."""

    default_code = ErrorCodes.TLS_SETUP


class TransportError(OwoError):
    """The HTTP executor failed to build, send or read a request."""

    default_code = ErrorCodes.TRANSPORT

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        bridge: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = dict(details or {})
        if bridge:
            details["bridge"] = bridge
        super().__init__(message, code=code, details=details)

    @property
    def bridge(self) -> Optional[str]:
        return self.details.get("bridge")


class HttpStatusError(TransportError):
    """The service answered with a non-2xx status."""

    default_code = ErrorCodes.HTTP_STATUS

    def __init__(
        self,
        status_code: int,
        body: str = "",
        *,
        bridge: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(
            f"Service returned HTTP {status_code}",
            bridge=bridge,
            details={"status_code": status_code, "body": body},
        )


class TooManyFilesError(OwoError):
    """More files than MAX_FILES were passed to a single upload."""

    default_code = ErrorCodes.TOO_MANY_FILES

    def __init__(self, count: int, max_files: int) -> None:
        super().__init__(
            f"Too many files to upload: {count} given, at most {max_files} allowed",
            details={"count": count, "max_files": max_files},
        )


class NoFilesError(OwoError):
    """An upload was requested with an empty list of files."""

    default_code = ErrorCodes.NO_FILES


class InvalidUriError(OwoError):
    """The request target built from the API root, key and URL did not parse."""

    default_code = ErrorCodes.INVALID_URI
