"""Shared helpers for MCP tools.

Text helpers operate on Python ``str`` values, i.e. on Unicode code points:
lengths count code points and reversal reverses code points. Combining marks
and multi-code-point emoji sequences are therefore still split by reversal.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

_WHITESPACE = re.compile(r"\s+")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_TITLE_WORD = re.compile(r"\w\S*")
_CAMEL_BOUNDARY = re.compile(r"^\w|[A-Z]|\b\w")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
TIME_FORMATS = ("iso", "unix_ms", "unix_s", "utc", "locale", "date_only", "time_only")


def word_count(text: str) -> int:
    """Count non-empty whitespace-delimited tokens."""
    return len(text.split())


def char_count(text: str) -> int:
    """Raw length, whitespace included."""
    return len(text)


def char_count_no_spaces(text: str) -> int:
    return len(_WHITESPACE.sub("", text))


def line_count(text: str) -> int:
    return len(_LINE_BREAK.split(text))


def reverse_text(text: str) -> str:
    return text[::-1]


def ratio(numerator: float, denominator: float) -> float:
    """Quotient rounded to two places, 0 when the denominator is 0."""
    if not denominator:
        return 0
    return round(numerator / denominator, 2)


def title_case(text: str) -> str:
    return _TITLE_WORD.sub(
        lambda match: match.group()[0].upper() + match.group()[1:].lower(), text
    )


def camel_case(text: str) -> str:
    def _convert(match: re.Match[str]) -> str:
        word = match.group()
        return word.lower() if match.start() == 0 else word.upper()

    return _WHITESPACE.sub("", _CAMEL_BOUNDARY.sub(_convert, text))


def apply_case(text: str, transform: str) -> str:
    """Apply one of the shared case transforms, returning a new string."""
    if transform == "uppercase":
        return text.upper()
    if transform == "lowercase":
        return text.lower()
    if transform == "titlecase":
        return title_case(text)
    if transform == "snake_case":
        return _WHITESPACE.sub("_", text).lower()
    if transform == "kebab-case":
        return _WHITESPACE.sub("-", text).lower()
    if transform == "camelCase":
        return camel_case(text)
    return text


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_unix_ms(moment: datetime) -> int:
    return (moment - EPOCH) // timedelta(milliseconds=1)


def iso_format(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_string(moment: datetime) -> str:
    """RFC 1123 form, e.g. ``Mon, 01 Jan 2024 00:00:00 GMT``."""
    return format_datetime(moment.astimezone(timezone.utc), usegmt=True)


def locale_string(moment: datetime) -> str:
    """Local wall-clock time in the ``M/D/YYYY, h:mm:ss AM`` form."""
    local = moment.astimezone()
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def format_moment(moment: datetime, fmt: str) -> str | int:
    """Render a timezone-aware datetime in one of :data:`TIME_FORMATS`."""
    if fmt == "unix_ms":
        return to_unix_ms(moment)
    if fmt == "unix_s":
        return to_unix_ms(moment) // 1000
    if fmt == "utc":
        return utc_string(moment)
    if fmt == "locale":
        return locale_string(moment)
    iso = iso_format(moment)
    if fmt == "date_only":
        return iso.split("T")[0]
    if fmt == "time_only":
        return iso.split("T")[1].replace("Z", "")
    return iso


def all_formats(moment: datetime) -> dict[str, str | int]:
    return {fmt: format_moment(moment, fmt) for fmt in TIME_FORMATS}
