"""
Caller-side validation helpers. These run before any I/O.
"""

from __future__ import annotations

from typing import Sized

from owo.constants import MAX_FILES
from owo.utils.exceptions import NoFilesError, TooManyFilesError


def validate_file_count(payloads: Sized, max_files: int = MAX_FILES) -> None:
    if not payloads:
        raise NoFilesError()
    if len(payloads) > max_files:
        raise TooManyFilesError(len(payloads), max_files)
