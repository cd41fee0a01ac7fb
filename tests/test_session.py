"""Session state machine: upload, filter, reset, stale uploads."""
import pytest

from senior_filter.config import MSG_NO_FILE, MSG_NO_THRESHOLD, MSG_NO_RESULTS, PREVIEW_ROWS
from senior_filter.data.schemas import (
    SessionState, SessionEvent,
    MissingFileError, MissingThresholdError, InvalidTransitionError,
)
from senior_filter.data.session import Session, transition


@pytest.fixture
def session():
    return Session(session_id="test")


@pytest.fixture
def loaded(session):
    token = session.begin_upload()
    session.complete_upload(token, "people.csv", [
        {"Name": "a", "Age": 59},
        {"Name": "b", "Age": 60},
        {"Name": "c", "Age": 61},
    ])
    return session


# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("state", list(SessionState))
def test_upload_reset_and_fail_allowed_from_anywhere(state):
    assert transition(state, SessionEvent.UPLOAD) == SessionState.LOADED
    assert transition(state, SessionEvent.RESET) == SessionState.NO_FILE
    assert transition(state, SessionEvent.FAIL) == SessionState.ERROR


@pytest.mark.parametrize("event", [SessionEvent.FILTER_MATCHED, SessionEvent.FILTER_EMPTY])
def test_cannot_filter_without_a_file(event):
    with pytest.raises(InvalidTransitionError):
        transition(SessionState.NO_FILE, event)


def test_filter_from_results_states():
    assert transition(SessionState.FILTERED, SessionEvent.FILTER_EMPTY) == SessionState.NO_RESULTS
    assert transition(SessionState.NO_RESULTS, SessionEvent.FILTER_MATCHED) == SessionState.FILTERED


# ---------------------------------------------------------------------------
# Session flow
# ---------------------------------------------------------------------------

def test_new_session(session):
    assert session.state == SessionState.NO_FILE
    assert not session.file_uploaded
    assert session.message == ""


def test_upload_moves_to_loaded(loaded):
    assert loaded.state == SessionState.LOADED
    assert loaded.filename == "people.csv"
    assert len(loaded.records) == 3


def test_filter_with_results(loaded, today):
    result = loaded.apply_filter("60", today)
    assert [r["Name"] for r in result] == ["b", "c"]
    assert loaded.state == SessionState.FILTERED
    assert loaded.threshold == 60
    assert loaded.message == ""


def test_filter_with_no_results(loaded, today):
    assert loaded.apply_filter("99", today) == []
    assert loaded.state == SessionState.NO_RESULTS
    assert loaded.message == MSG_NO_RESULTS


def test_refilter_replaces_results(loaded, today):
    loaded.apply_filter("61", today)
    loaded.apply_filter("59", today)
    assert len(loaded.filtered) == 3


def test_filter_without_file(session, today):
    with pytest.raises(MissingFileError):
        session.apply_filter("60", today)
    assert session.state == SessionState.ERROR
    assert session.message == MSG_NO_FILE


def test_threshold_checked_before_file(session, today):
    with pytest.raises(MissingThresholdError):
        session.apply_filter("", today)
    assert session.message == MSG_NO_THRESHOLD


def test_error_is_recoverable(loaded, today):
    with pytest.raises(MissingThresholdError):
        loaded.apply_filter(None, today)
    assert loaded.state == SessionState.ERROR
    loaded.apply_filter("60", today)
    assert loaded.state == SessionState.FILTERED
    assert loaded.message == ""


def test_latest_message_wins(loaded, today):
    loaded.apply_filter("99", today)
    with pytest.raises(MissingThresholdError):
        loaded.apply_filter("", today)
    assert loaded.message == MSG_NO_THRESHOLD


def test_new_upload_replaces_records_and_clears_results(loaded, today):
    loaded.apply_filter("60", today)
    token = loaded.begin_upload()
    loaded.complete_upload(token, "other.csv", [{"Name": "z", "Age": 80}])
    assert loaded.records == [{"Name": "z", "Age": 80}]
    assert loaded.filtered == []
    assert loaded.state == SessionState.LOADED


def test_failed_upload_keeps_previous_records(loaded):
    token = loaded.begin_upload()
    assert loaded.fail_upload(token, "Could not read the uploaded file.")
    assert loaded.state == SessionState.ERROR
    assert loaded.filename == "people.csv"
    assert len(loaded.records) == 3


def test_headers_only_file_gives_no_results(session, today):
    token = session.begin_upload()
    session.complete_upload(token, "empty.csv", [])
    assert session.apply_filter("0", today) == []
    assert session.message == MSG_NO_RESULTS


# ---------------------------------------------------------------------------
# Stale uploads
# ---------------------------------------------------------------------------

def test_older_upload_finishing_last_is_ignored(session):
    first = session.begin_upload()
    second = session.begin_upload()
    assert session.complete_upload(second, "second.csv", [{"Age": 2}])
    assert not session.complete_upload(first, "first.csv", [{"Age": 1}])
    assert session.filename == "second.csv"
    assert session.records == [{"Age": 2}]


def test_stale_failure_is_ignored(loaded):
    first = loaded.begin_upload()
    second = loaded.begin_upload()
    loaded.complete_upload(second, "second.csv", [])
    assert not loaded.fail_upload(first, "boom")
    assert loaded.state == SessionState.LOADED
    assert loaded.message == ""


def test_rejected_upload_supersedes_in_flight_upload(loaded):
    slow = loaded.begin_upload()
    rejected = loaded.begin_upload()
    loaded.fail_upload(rejected, "Unsupported file format.")
    assert not loaded.complete_upload(slow, "old.csv", [{"Age": 99}])
    assert loaded.state == SessionState.ERROR
    assert loaded.message == "Unsupported file format."
    assert loaded.filename == "people.csv"


def test_reset_cancels_in_flight_upload(session):
    token = session.begin_upload()
    session.reset()
    assert not session.complete_upload(token, "late.csv", [{"Age": 1}])
    assert session.state == SessionState.NO_FILE


# ---------------------------------------------------------------------------
# Reset / preview
# ---------------------------------------------------------------------------

def test_reset_clears_everything(loaded, today):
    loaded.apply_filter("60", today)
    loaded.reset()
    assert loaded.state == SessionState.NO_FILE
    assert loaded.filename is None
    assert loaded.records == []
    assert loaded.filtered == []
    assert loaded.threshold is None
    assert loaded.message == ""


def test_preview_caps_rows(session, today):
    token = session.begin_upload()
    session.complete_upload(token, "many.csv", [{"Age": 70 + i} for i in range(PREVIEW_ROWS + 3)])
    session.apply_filter("0", today)
    assert len(session.preview()) == PREVIEW_ROWS
    assert len(session.preview(show_all=True)) == PREVIEW_ROWS + 3
