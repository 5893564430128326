# date_utils.py
#
# Purpose:
# Turn activity-map keys like "2024-01-01" into one canonical number per
# calendar day: milliseconds since the Unix epoch at UTC midnight.
#
# Every other module works with these integer "day instants", so two keys
# for the same calendar day always land on the same number and day gaps are
# plain integer arithmetic.

import re
from datetime import datetime, timedelta, timezone

MS_PER_DAY = 86_400_000

# Strict calendar pattern: 4-digit year, month 01-12, day 01-31.
# [0-9] instead of \d so non-ASCII digits are rejected.
DATE_KEY_PATTERN = re.compile(
    r"([0-9]{4})-(0[1-9]|1[0-2])-(0[1-9]|[12][0-9]|3[01])"
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def normalize_date_key(key):
    """
    Convert a "YYYY-MM-DD" key into a UTC-midnight instant (int milliseconds).

    Returns None for anything that is not a real calendar date:
      - non-string keys (None, ints, dates, ...)
      - strings that do not match the pattern exactly ("2024-1-01", "2024-01-01T00:00")
      - impossible dates such as "2023-02-30" or "2023-04-31"

    This is a filter, not a validator: callers drop None results and carry on.
    """
    if not isinstance(key, str):
        return None

    match = DATE_KEY_PATTERN.fullmatch(key)
    if match is None:
        return None

    year, month, day = (int(part) for part in match.groups())

    # datetime() refuses to roll Feb 30 over into March, so a ValueError here
    # is exactly the "components changed after reconstruction" case.
    try:
        dt = datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        return None

    return (dt - _EPOCH) // _ONE_MS


def day_ms_to_date(day_ms):
    """Inverse of normalize_date_key: instant -> "YYYY-MM-DD"."""
    dt = _EPOCH + timedelta(milliseconds=day_ms)
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"


def days_between(start_ms, end_ms):
    """Whole days from start_ms to end_ms (floor division)."""
    return (end_ms - start_ms) // MS_PER_DAY
