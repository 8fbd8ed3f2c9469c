"""
Fixed values used to talk to the whats-this service.

The URL templates are formatted by `owo.utils.urls`, which percent-encodes
every query value before substitution.
"""

from __future__ import annotations

VERSION = "0.1.0"

# The maximum number of files that may be uploaded in one request.
MAX_FILES = 3

DEFAULT_API_ROOT = "https://api.awau.moe"
UPLOAD_PATH = "/upload/pomf"
SHORTEN_PATH = "/shorten/polr"

# Multipart field name the upload endpoint reads files from.
UPLOAD_FIELD = "files[]"
DEFAULT_FILENAME = "file"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

PROJECT_URL = "https://github.com/whats-this/owo.py"
USER_AGENT = f"WhatsThisClient ({PROJECT_URL}, {VERSION})"
