"""
Response models for the upload endpoint.

Decoding is left to pydantic; no validation beyond the schema is done here.
"""

from __future__ import annotations

from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from owo.utils.exceptions import JsonDecodeError


# Unsigned 64-bit byte count.
U64 = Annotated[int, Field(ge=0, le=2**64 - 1)]


# -------------------------
# One stored file
# -------------------------
class UploadedFile(BaseModel):
    model_config = ConfigDict(strict=True)

    hash: str
    name: Optional[str] = None   # absent when the service assigns none
    size: U64
    url: str


# -------------------------
# Upload response (single & bulk)
# -------------------------
class FileUploadResponse(BaseModel):
    model_config = ConfigDict(strict=True)

    success: bool
    files: List[UploadedFile]


def parse_upload_response(body: Union[bytes, str]) -> FileUploadResponse:
    """Decode an upload response body, raising JsonDecodeError on mismatch."""
    try:
        return FileUploadResponse.model_validate_json(body)
    except ValidationError as exc:
        raise JsonDecodeError(
            f"Invalid upload response: {exc.error_count()} error(s)",
            details={"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc
