"""
Shared types: file formats, session states/events, and the error hierarchy.
"""
from __future__ import annotations

from enum import Enum

from senior_filter.config import (
    MSG_NO_FILE, MSG_UNSUPPORTED_FORMAT, MSG_UNREADABLE,
    MSG_NO_THRESHOLD, MSG_BAD_THRESHOLD, MSG_NOTHING_TO_EXPORT,
)


class FileFormat(str, Enum):
    EXCEL = "excel"
    CSV = "csv"


class SessionState(str, Enum):
    NO_FILE = "no_file"
    LOADED = "loaded"
    FILTERED = "filtered"
    NO_RESULTS = "no_results"
    ERROR = "error"


class SessionEvent(str, Enum):
    UPLOAD = "upload"
    FILTER_MATCHED = "filter_matched"
    FILTER_EMPTY = "filter_empty"
    FAIL = "fail"
    RESET = "reset"


# ---------------------------------------------------------------------------
# Errors; str(exc) is the message shown to the user
# ---------------------------------------------------------------------------

class SeniorFilterError(ValueError):
    default_message = ""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class MissingFileError(SeniorFilterError):
    default_message = MSG_NO_FILE


class UnsupportedFormatError(SeniorFilterError):
    default_message = MSG_UNSUPPORTED_FORMAT


class FileReadError(SeniorFilterError):
    default_message = MSG_UNREADABLE


class MissingThresholdError(SeniorFilterError):
    default_message = MSG_NO_THRESHOLD


class InvalidThresholdError(SeniorFilterError):
    default_message = MSG_BAD_THRESHOLD


class NothingToExportError(SeniorFilterError):
    default_message = MSG_NOTHING_TO_EXPORT


class InvalidTransitionError(SeniorFilterError):
    pass
