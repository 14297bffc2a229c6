from datetime import datetime
import re
from gridsight.schemas import Timestamp

CANONICAL_FORMAT = "%Y-%m-%d %H:%M"

# Date part with '-', '/' or '.' separators, optional 'T' or space separated
# time part. Seconds, fractions and UTC offsets are accepted and dropped.
_TIMESTAMP_RE = re.compile(
    r"^(?P<year>\d{4})[-/.](?P<month>\d{1,2})[-/.](?P<day>\d{1,2})"
    r"(?:[T ]+(?P<hour>\d{1,2}):(?P<minute>\d{2})"
    r"(?::\d{2}(?:\.\d+)?)?"
    r"(?:Z|[+-]\d{2}:?\d{2})?)?$"
)


class TimeAlignmentError(Exception):
    pass


def parse_timestamp(raw: str) -> datetime:
    """
    Parse a timestamp string to a naive datetime with minute precision.

    Offsets are ignored, not converted: "2024-01-01T10:00+02:00" is 10:00.

    Raises:
        TimeAlignmentError: If the string is not a recognisable date/time
    """
    match = _TIMESTAMP_RE.match(raw.strip())
    if match is None:
        raise TimeAlignmentError(f"Unrecognised timestamp: {raw!r}")

    parts = match.groupdict()
    try:
        return datetime(
            int(parts["year"]),
            int(parts["month"]),
            int(parts["day"]),
            int(parts["hour"] or 0),
            int(parts["minute"] or 0),
        )
    except ValueError as e:
        raise TimeAlignmentError(f"Invalid timestamp {raw!r}: {e}") from e


def normalize_timestamp(raw: str) -> Timestamp:
    """
    Canonical "YYYY-MM-DD HH:mm" key for a timestamp.

    Unparseable input is returned stripped but otherwise unchanged so it
    still gets a bucket of its own when series are merged.
    """
    try:
        return parse_timestamp(raw).strftime(CANONICAL_FORMAT)
    except TimeAlignmentError:
        return raw.strip()


def is_canonical(ts: str) -> bool:
    try:
        return parse_timestamp(ts).strftime(CANONICAL_FORMAT) == ts
    except TimeAlignmentError:
        return False


def display_time(key: Timestamp) -> str:
    """Time-of-day part of a key ("HH:mm"), or the key itself if it has none"""
    _, sep, time_part = key.partition(" ")
    return time_part if sep and time_part else key
