"""Record normalisation: stored ages, DOB-derived ages, pass-through."""
import datetime as dt

import numpy as np
import pytest

from senior_filter.data.normalize import normalize_record, record_age, coerce_age, is_blank


def test_existing_age_is_kept(today):
    raw = {"Name": "Ann", "Age": 70, "DOB": "15/06/1990"}
    assert normalize_record(raw, today) == raw


def test_zero_age_counts_as_present(today):
    raw = {"Name": "Baby", "Age": 0, "DOB": "15/06/1990"}
    assert normalize_record(raw, today)["Age"] == 0


def test_age_derived_from_dob(today):
    record = normalize_record({"Name": "Ann", "DOB": "15/06/1990"}, today)
    assert record == {"Name": "Ann", "DOB": "15/06/1990", "Age": 33}
    assert list(record) == ["Name", "DOB", "Age"]


def test_age_derived_from_date_of_birth(today):
    record = normalize_record({"Date of Birth": "14.06.1990"}, today)
    assert record["Age"] == 34


def test_blank_age_is_replaced_in_place(today):
    record = normalize_record({"Age": "", "Name": "Ann", "DOB": "15/06/1990"}, today)
    assert list(record) == ["Age", "Name", "DOB"]
    assert record["Age"] == 33


def test_dob_takes_priority_over_date_of_birth(today):
    record = normalize_record({"DOB": "15/06/1990", "Date of Birth": "15/06/1950"}, today)
    assert record["Age"] == 33


def test_blank_dob_falls_back_to_date_of_birth(today):
    record = normalize_record({"DOB": " ", "Date of Birth": "15/06/1950"}, today)
    assert record["Age"] == 73


def test_unparseable_dob_leaves_age_absent(today):
    raw = {"Name": "Ann", "DOB": "sometime in 1990"}
    record = normalize_record(raw, today)
    assert record == raw
    assert "Age" not in record


def test_no_age_columns_passes_through(today):
    raw = {"Name": "Ann", "City": "Pune"}
    assert normalize_record(raw, today) == raw


def test_headers_are_case_sensitive(today):
    record = normalize_record({"dob": "15/06/1990", "AGE": None}, today)
    assert "Age" not in record


def test_input_is_not_mutated(today):
    raw = {"DOB": "15/06/1990"}
    normalize_record(raw, today)
    assert raw == {"DOB": "15/06/1990"}


def test_real_date_cell(today):
    record = normalize_record({"DOB": dt.datetime(1950, 1, 1)}, today)
    assert record["Age"] == 74


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    (60, 60),
    (60.9, 60),
    ("60", 60),
    (" 61 ", 61),
    ("60.0", 60),
    (np.int64(62), 62),
    (np.float64(63.0), 63),
    ("unparseable", None),
    ("", None),
    (None, None),
    (float("nan"), None),
    (True, None),
])
def test_coerce_age(value, expected):
    assert coerce_age(value) == expected


@pytest.mark.parametrize("value, expected", [
    (None, True), ("", True), ("   ", True), (float("nan"), True),
    (0, False), ("x", False), (dt.date(2000, 1, 1), False),
])
def test_is_blank(value, expected):
    assert is_blank(value) is expected


def test_record_age_prefers_numeric_age(today):
    assert record_age({"Age": "59", "DOB": "15/06/1950"}, today) == 59


def test_record_age_recomputes_when_age_not_numeric(today):
    assert record_age({"Age": "old", "DOB": "15/06/1950"}, today) == 73


def test_record_age_absent(today):
    assert record_age({"Age": "old"}, today) is None
    assert record_age({"Name": "Ann"}, today) is None
