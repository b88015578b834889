"""Datetime utilities for parsing and formatting task instants.

Two text forms exist for an instant:

* the user-input form ``d/M/yyyy HHmm`` (e.g. ``2/12/2019 1800``), accepted
  by commands such as ``deadline`` and ``occurs``;
* the stored form ``MMM dd yyyy HH:mm`` (e.g. ``Dec 02 2019 18:00``), written
  to the tasks file and shown to the user.

Instants are naive datetimes with minute precision. No timezone handling is
done; everything lives on the local calendar.
"""

import re
from datetime import datetime

from ..errors import InvalidDateFormatError


INPUT_FORMAT = "%d/%m/%Y %H%M"
INPUT_PATTERN = "d/M/yyyy HHmm (e.g. 2/12/2019 1800)"
INPUT_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{4} \d{4}$")

STORED_FORMAT = "%b %d %Y %H:%M"
STORED_PATTERN = "MMM dd yyyy HH:mm (e.g. Dec 02 2019 18:00)"
STORED_RE = re.compile(r"^[A-Z][a-z]{2} \d{2} \d{4} \d{2}:\d{2}$")


def parse_datetime(text: str) -> datetime:
    """Parse user-supplied date text into an instant.

    Args:
        text: Date text in ``d/M/yyyy HHmm`` form

    Returns:
        Naive datetime with seconds set to zero

    Raises:
        InvalidDateFormatError: If the text does not match the pattern or
            names an impossible calendar value (e.g. month 13)
    """
    candidate = (text or "").strip()
    if not INPUT_RE.match(candidate):
        raise InvalidDateFormatError(candidate, INPUT_PATTERN)
    try:
        return datetime.strptime(candidate, INPUT_FORMAT)
    except ValueError:
        raise InvalidDateFormatError(candidate, INPUT_PATTERN) from None


def parse_stored_datetime(text: str) -> datetime:
    """Parse the stored form produced by :func:`stringify`.

    Only the exact form written by ``stringify`` is accepted, which keeps
    ``stringify(parse_stored_datetime(s)) == s`` for every accepted ``s``.

    Raises:
        InvalidDateFormatError: If the text is not in stored form
    """
    if not STORED_RE.match(text or ""):
        raise InvalidDateFormatError(text, STORED_PATTERN)
    try:
        return datetime.strptime(text, STORED_FORMAT)
    except ValueError:
        raise InvalidDateFormatError(text, STORED_PATTERN) from None


def stringify(dt: datetime) -> str:
    """Format an instant in stored/display form.

    The year is padded by hand since ``%Y`` leaves years below 1000 short on
    some platforms.
    """
    return f"{dt:%b %d} {dt.year:04d} {dt:%H:%M}"


def truncate_to_minute(dt: datetime) -> datetime:
    """Drop seconds, microseconds and tzinfo from a datetime."""
    return dt.replace(second=0, microsecond=0, tzinfo=None)
