"""
Per-browser session: one authoritative state plus the data it owns.

State changes go through ``transition`` only; the data fields (records,
filtered rows, message) are updated alongside by the Session methods.
"""
from __future__ import annotations

import datetime as dt
import threading
from dataclasses import dataclass, field

from senior_filter.config import PREVIEW_ROWS, MSG_NO_FILE, MSG_NO_RESULTS
from senior_filter.data.filtering import parse_threshold, filter_by_min_age
from senior_filter.data.schemas import (
    SessionState, SessionEvent,
    SeniorFilterError, MissingFileError, InvalidTransitionError,
)


# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------

_FILTERABLE = (SessionState.LOADED, SessionState.FILTERED, SessionState.NO_RESULTS, SessionState.ERROR)

TRANSITIONS: dict[tuple[SessionState, SessionEvent], SessionState] = {}
for _state in SessionState:
    TRANSITIONS[(_state, SessionEvent.UPLOAD)] = SessionState.LOADED
    TRANSITIONS[(_state, SessionEvent.FAIL)] = SessionState.ERROR
    TRANSITIONS[(_state, SessionEvent.RESET)] = SessionState.NO_FILE
for _state in _FILTERABLE:
    TRANSITIONS[(_state, SessionEvent.FILTER_MATCHED)] = SessionState.FILTERED
    TRANSITIONS[(_state, SessionEvent.FILTER_EMPTY)] = SessionState.NO_RESULTS


def transition(state: SessionState, event: SessionEvent) -> SessionState:
    """Next state for an event; raises InvalidTransitionError if undefined."""
    try:
        return TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidTransitionError(f"Cannot {event.value} while {state.value}")


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

@dataclass
class Session:
    """Everything one user has loaded and filtered."""
    session_id: str
    state: SessionState = SessionState.NO_FILE
    filename: str | None = None
    records: list[dict] = field(default_factory=list)
    threshold: int | None = None
    filtered: list[dict] = field(default_factory=list)
    message: str = ""                    # latest user-facing message only
    generation: int = 0                  # bumps on every upload start / reset
    touched_at: dt.datetime = field(default_factory=dt.datetime.now)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def _apply(self, event: SessionEvent) -> None:
        self.state = transition(self.state, event)

    def touch(self) -> None:
        self.touched_at = dt.datetime.now()

    @property
    def file_uploaded(self) -> bool:
        return self.filename is not None

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def fail(self, message: str) -> None:
        with self._lock:
            self.message = message
            self._apply(SessionEvent.FAIL)

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def begin_upload(self) -> int:
        """Start an upload and return its token.

        Only the most recently started upload may complete; earlier ones
        still in flight become stale.
        """
        with self._lock:
            self.generation += 1
            return self.generation

    def is_current(self, token: int) -> bool:
        return token == self.generation

    def complete_upload(self, token: int, filename: str, records: list[dict]) -> bool:
        """Replace the record set. Returns False (and changes nothing) if stale."""
        with self._lock:
            if not self.is_current(token):
                return False
            self.filename = filename
            self.records = list(records)
            self.filtered = []
            self.message = ""
            self._apply(SessionEvent.UPLOAD)
            return True

    def fail_upload(self, token: int, message: str) -> bool:
        """Record a failed upload; previous records are kept."""
        with self._lock:
            if not self.is_current(token):
                return False
            self.fail(message)
            return True

    # ------------------------------------------------------------------
    # Filter
    # ------------------------------------------------------------------

    def apply_filter(self, raw_threshold, today: dt.date | None = None) -> list[dict]:
        """Validate the threshold, check a file is loaded, then filter.

        Raises a SeniorFilterError (after moving to ERROR) when a
        precondition fails.  An empty result is not an error.
        """
        with self._lock:
            try:
                min_age = parse_threshold(raw_threshold)
            except SeniorFilterError as exc:
                self.fail(str(exc))
                raise
            if not self.file_uploaded:
                self.fail(MSG_NO_FILE)
                raise MissingFileError()

            self.threshold = min_age
            self.filtered = filter_by_min_age(self.records, min_age, today)
            if self.filtered:
                self.message = ""
                self._apply(SessionEvent.FILTER_MATCHED)
            else:
                self.message = MSG_NO_RESULTS
                self._apply(SessionEvent.FILTER_EMPTY)
            return self.filtered

    def preview(self, show_all: bool = False) -> list[dict]:
        """Filtered rows, capped at PREVIEW_ROWS unless show_all."""
        if show_all:
            return list(self.filtered)
        return self.filtered[:PREVIEW_ROWS]

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Back to NO_FILE; any upload still in flight becomes stale."""
        with self._lock:
            self.generation += 1
            self.filename = None
            self.records = []
            self.threshold = None
            self.filtered = []
            self.message = ""
            self._apply(SessionEvent.RESET)
