import pytest
from gridsight.core.time_alignment import (
    TimeAlignmentError,
    display_time,
    is_canonical,
    normalize_timestamp,
    parse_timestamp,
)


@pytest.mark.parametrize("raw", [
    "2024-01-01 10:00",
    "2024-01-01T10:00",
    "2024-01-01T10:00:00",
    "2024-01-01T10:00:59.123Z",
    "2024-01-01T10:00:00+02:00",
    " 2024-01-01 10:00 ",
    "2024/01/01 10:00",
    "2024-1-1 10:00",
])
def test_variants_normalize_to_same_key(raw):
    assert normalize_timestamp(raw) == "2024-01-01 10:00"


def test_single_digit_hour_padded():
    assert normalize_timestamp("2024-03-05 7:05") == "2024-03-05 07:05"


def test_date_only():
    assert normalize_timestamp("2024-03-05") == "2024-03-05 00:00"


def test_malformed_kept_as_is():
    assert normalize_timestamp("  yesterday noon ") == "yesterday noon"
    assert normalize_timestamp("2024-02-30 10:00") == "2024-02-30 10:00"


def test_parse_rejects_garbage():
    with pytest.raises(TimeAlignmentError):
        parse_timestamp("not a time")
    with pytest.raises(TimeAlignmentError):
        parse_timestamp("2024-13-01 00:00")


def test_is_canonical():
    assert is_canonical("2024-01-01 10:00")
    assert not is_canonical("2024-01-01T10:00")
    assert not is_canonical("garbage")


def test_display_time():
    assert display_time("2024-01-01 10:00") == "10:00"
    assert display_time("garbage") == "garbage"
