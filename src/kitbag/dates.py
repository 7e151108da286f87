"""Date parsing, Jalali formatting and duration helpers.

Parsers return a `datetime.datetime`, or None when the input is not a
valid date. Jalali (Persian calendar) dates are handled with jdatetime
and always converted to Gregorian datetimes.
"""

import datetime
import math
import re
from typing import Any, Literal, NamedTuple

import jdatetime

from kitbag.common import deep_clone

Locale = Literal["en", "fa"]

RFC3339 = "%Y-%m-%dT%H:%M:%S%z"

_RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:Z|[+-]\d{2}:?\d{2})$"
)

# Length of each supported duration unit in milliseconds
_UNIT_MS: dict[str, int] = {
    "milliseconds": 1,
    "seconds": 1_000,
    "minutes": 60_000,
    "hours": 3_600_000,
    "days": 86_400_000,
    "weeks": 604_800_000,
}

DURATION_TRANSLATIONS: dict[str, dict[str, str]] = {
    "years": {"en": "years", "fa": "سال"},
    "months": {"en": "months", "fa": "ماه"},
    "days": {"en": "days", "fa": "روز"},
    "hours": {"en": "hours", "fa": "ساعت"},
    "minutes": {"en": "minutes", "fa": "دقیقه"},
    "seconds": {"en": "seconds", "fa": "ثانیه"},
}

_RELATIVE_TIME: dict[str, dict[str, str]] = {
    "en": {
        "future": "in %s",
        "past": "%s ago",
        "s": "a few seconds",
        "m": "a minute",
        "mm": "%d minutes",
        "h": "an hour",
        "hh": "%d hours",
        "d": "a day",
        "dd": "%d days",
        "M": "a month",
        "MM": "%d months",
        "y": "a year",
        "yy": "%d years",
    },
    "fa": {
        "future": "در %s",
        "past": "%s پیش",
        "s": "چند ثانیه",
        "m": "یک دقیقه",
        "mm": "%d دقیقه",
        "h": "یک ساعت",
        "hh": "%d ساعت",
        "d": "یک روز",
        "dd": "%d روز",
        "M": "یک ماه",
        "MM": "%d ماه",
        "y": "یک سال",
        "yy": "%d سال",
    },
}


class InvalidUnitError(ValueError):
    """Raised when a duration unit is not supported."""

    def __init__(self, unit: str, allowed: tuple[str, ...]) -> None:
        self.unit = unit
        super().__init__(
            f"Invalid duration unit: {unit!r}. Expected one of: {', '.join(allowed)}"
        )


class HMS(NamedTuple):
    """A duration split into whole hours, minutes and seconds."""

    hours: int
    minutes: int
    seconds: int


def parse(date: Any) -> datetime.datetime | None:
    """Parse a Gregorian or Jalali date into a datetime.

    Accepts datetimes and dates (Gregorian or jdatetime), epoch
    milliseconds, and ISO 8601 strings.

    Args:
        date: The date to parse.

    Returns:
        The parsed datetime, or None if `date` is not a valid date.
    """
    if isinstance(date, jdatetime.datetime):
        return date.togregorian()
    if isinstance(date, jdatetime.date):
        return datetime.datetime.combine(date.togregorian(), datetime.time())
    if isinstance(date, datetime.datetime):
        return deep_clone(date)
    if isinstance(date, datetime.date):
        return datetime.datetime.combine(date, datetime.time())
    if isinstance(date, bool):
        return None
    if isinstance(date, (int, float)):
        try:
            return datetime.datetime.fromtimestamp(date / 1000, tz=datetime.UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(date, str):
        try:
            return datetime.datetime.fromisoformat(date.strip())
        except ValueError:
            return None
    return None


def parse_rfc3339(date: str | None = None) -> datetime.datetime | None:
    """Strictly parse an RFC 3339 timestamp such as ``2023-10-05T12:30:45Z``.

    Returns:
        A timezone-aware datetime, or None if `date` does not match.
    """
    if date is None or not _RFC3339_PATTERN.match(date):
        return None
    try:
        return datetime.datetime.strptime(date, RFC3339)
    except ValueError:
        return None


def parse_from(
    fmt: str, date: str | None = None, jalali: bool = False
) -> datetime.datetime | None:
    """Parse a formatted date string.

    Args:
        fmt: A `strptime` format, e.g. ``"%Y-%m-%d"``.
        date: The string to parse.
        jalali: Read the date on the Jalali calendar, e.g. ``"1402/07/13"``
            with ``"%Y/%m/%d"``.

    Returns:
        The Gregorian datetime, or None if `date` does not match `fmt`.
    """
    if date is None:
        return None
    try:
        if jalali:
            return jdatetime.datetime.strptime(date, fmt).togregorian()
        return datetime.datetime.strptime(date, fmt)
    except ValueError:
        return None


def format_jalali(date: datetime.date, fmt: str = "%Y/%m/%d") -> str:
    """Render a Gregorian date or datetime on the Jalali calendar."""
    if isinstance(date, datetime.datetime):
        return jdatetime.datetime.fromgregorian(datetime=date).strftime(fmt)
    return jdatetime.date.fromgregorian(date=date).strftime(fmt)


def _round(x: float) -> int:
    """Round half up, as JavaScript's Math.round does."""
    return math.floor(x + 0.5)


def _relative(seconds_total: float, locale: str) -> str:
    words = _RELATIVE_TIME.get(locale, _RELATIVE_TIME["en"])
    seconds = _round(seconds_total)
    minutes = _round(seconds_total / 60)
    hours = _round(seconds_total / 3600)
    days = _round(seconds_total / 86400)
    months = _round(seconds_total / 86400 * 4800 / 146097)
    years = _round(seconds_total / 86400 * 4800 / 146097 / 12)

    if seconds <= 44:
        return words["s"]
    if minutes <= 1:
        return words["m"]
    if minutes < 45:
        return words["mm"] % minutes
    if hours <= 1:
        return words["h"]
    if hours < 22:
        return words["hh"] % hours
    if days <= 1:
        return words["d"]
    if days < 26:
        return words["dd"] % days
    if months <= 1:
        return words["M"]
    if months < 11:
        return words["MM"] % months
    if years <= 1:
        return words["y"]
    return words["yy"] % years


def ago(
    date: Any,
    locale: Locale = "fa",
    now: datetime.datetime | None = None,
) -> str:
    """Describe the time between `date` and now, e.g. ``"2 hours ago"``.

    Args:
        date: Anything `parse` accepts.
        locale: ``"en"`` or ``"fa"``.
        now: The reference time. Defaults to the current time, aware or
            naive to match `date`. When only one of `date` and `now` is
            naive, it is taken as local time.

    Returns:
        The humanized difference, or an empty string if `date` is invalid.
    """
    d = parse(date)
    if d is None:
        return ""

    if now is None:
        now = datetime.datetime.now(d.tzinfo)
    elif (d.tzinfo is None) != (now.tzinfo is None):
        d, now = d.astimezone(), now.astimezone()

    diff = (d - now).total_seconds()
    words = _RELATIVE_TIME.get(locale, _RELATIVE_TIME["en"])
    template = words["future"] if diff > 0 else words["past"]
    return template % _relative(abs(diff), locale)


def _unit_ms(unit: str, allowed: tuple[str, ...]) -> int:
    if unit not in allowed:
        raise InvalidUnitError(unit, allowed)
    return _UNIT_MS[unit]


def to_hms(
    duration: float, unit: Literal["milliseconds", "seconds"] = "seconds"
) -> HMS:
    """Split a duration into hours, minutes and seconds.

    The sign of `duration` is ignored and fractions of a second are
    dropped.

    Raises:
        InvalidUnitError: If `unit` is not "milliseconds" or "seconds".

    Examples:
        >>> to_hms(3661)
        HMS(hours=1, minutes=1, seconds=1)
    """
    factor = _unit_ms(unit, ("milliseconds", "seconds"))
    total_seconds = math.floor(abs(duration) * factor / 1000)

    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return HMS(hours=hours, minutes=minutes, seconds=seconds)


def _translate_duration(value: int, unit: str, locale: str) -> str:
    translation = DURATION_TRANSLATIONS.get(unit, {}).get(locale, unit)
    return f"{value} {translation}"


def humanize(
    duration: float,
    unit: str = "milliseconds",
    locale: Locale = "fa",
) -> str:
    """Convert a duration into a readable string.

    The duration is split into years, months, days, hours, minutes and
    seconds; months are derived from days on the average Gregorian month.
    Zero parts are left out.

    Args:
        duration: The duration, e.g. 3661000 for one hour, one minute and
            one second in milliseconds. The sign is ignored.
        unit: One of milliseconds, seconds, minutes, hours, days, weeks.
        locale: ``"en"`` or ``"fa"``.

    Returns:
        E.g. ``"1 hours, 1 minutes, 1 seconds"`` or ``"1 ساعت و 1 دقیقه و 1 ثانیه"``.

    Raises:
        InvalidUnitError: If `unit` is not supported.
    """
    total_ms = abs(duration) * _unit_ms(unit, tuple(_UNIT_MS))

    total_seconds = math.floor(total_ms / 1000)
    total_minutes, seconds = divmod(total_seconds, 60)
    total_hours, minutes = divmod(total_minutes, 60)
    days, hours = divmod(total_hours, 24)

    total_months = math.floor(days * 4800 / 146097)
    days -= math.ceil(total_months * 146097 / 4800)
    years, months = divmod(total_months, 12)

    units = [
        (years, "years"),
        (months, "months"),
        (days, "days"),
        (hours, "hours"),
        (minutes, "minutes"),
        (seconds, "seconds"),
    ]
    parts = [_translate_duration(value, name, locale) for value, name in units if value]

    if not parts:
        return _translate_duration(0, "seconds", locale)
    return (", " if locale == "en" else " و ").join(parts)
