"""Parses compound duration strings such as "1d12h30m" into timedeltas.

Grammar: ``<N>y<N>M<N>w<N>d<N>h<N>m<N>s<N>ms`` where every component is
optional but present components must keep that order. Calendar units are
approximated: a year is 365 days, a month 30 days, a week 7 days.
"""

import logging
import re
from datetime import timedelta
from typing import Union

from tierstore.domain.exceptions import InvalidFormatError

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30
DAYS_PER_WEEK = 7

# [0-9] instead of \d so that non-ASCII digits are rejected
_DURATION_PATTERN = re.compile(
    r"(?:(?P<years>[0-9]+)y)?"
    r"(?:(?P<months>[0-9]+)M)?"
    r"(?:(?P<weeks>[0-9]+)w)?"
    r"(?:(?P<days>[0-9]+)d)?"
    r"(?:(?P<hours>[0-9]+)h)?"
    r"(?:(?P<minutes>[0-9]+)m)?"
    r"(?:(?P<seconds>[0-9]+)s)?"
    r"(?:(?P<milliseconds>[0-9]+)ms)?"
)

DurationLike = Union[str, int, timedelta]


def parse_duration(text: str) -> timedelta:
    """Parses a duration expression into an exact timedelta.

    Args:
        text: The expression, e.g. "2y", "1d12h30m" or "" (zero).

    Returns:
        The summed duration.

    Raises:
        InvalidFormatError: If the text does not match the grammar or the
            result does not fit into a timedelta.
    """
    if not isinstance(text, str):
        raise InvalidFormatError(repr(text), "expected a string")

    match = _DURATION_PATTERN.fullmatch(text)
    if match is None:
        raise InvalidFormatError(text)

    try:
        parts = {name: int(raw) if raw is not None else 0 for name, raw in match.groupdict().items()}
        days = (
            parts["years"] * DAYS_PER_YEAR
            + parts["months"] * DAYS_PER_MONTH
            + parts["weeks"] * DAYS_PER_WEEK
            + parts["days"]
        )
        duration = timedelta(
            days=days,
            hours=parts["hours"],
            minutes=parts["minutes"],
            seconds=parts["seconds"],
            milliseconds=parts["milliseconds"],
        )
    except (OverflowError, ValueError) as e:
        raise InvalidFormatError(text, "duration out of range") from e

    logger.debug(f"Parsed duration {text!r} as {duration}")
    return duration


def duration_to_seconds(value: DurationLike) -> int:
    """Converts a duration string, timedelta or plain second count to whole seconds.

    Sub-second precision is discarded (floored).
    """
    if isinstance(value, bool):
        raise TypeError("Expiration must be a duration string, timedelta or int, not bool")
    if isinstance(value, int):
        return value
    if isinstance(value, timedelta):
        return value // timedelta(seconds=1)
    return parse_duration(value) // timedelta(seconds=1)
