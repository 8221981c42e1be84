"""Shared utility functions for service layer."""
import re
import unicodedata
from datetime import UTC, datetime, tzinfo

# Bounds are sent to the database as UTC instants
_MIN_UTC = datetime.min.replace(tzinfo=UTC)
_MAX_UTC = datetime.max.replace(tzinfo=UTC)


def _clamp_to_utc_range(value: datetime) -> datetime:
    try:
        value.astimezone(UTC)
    except OverflowError:
        return _MIN_UTC if value.year == datetime.min.year else _MAX_UTC
    return value


def year_bounds(year: int, tz: tzinfo) -> tuple[datetime, datetime]:
    """
    Return the calendar-year window ``[start, end)`` for ``year`` in ``tz``.

    ``start`` is midnight on January 1st and ``end`` is midnight on January 1st
    of the following year, both in ``tz``. Callers filter with
    ``start <= ts < end`` so the whole of December 31st is included.

    In years 1 and 9999 a local midnight may have no UTC equivalent (e.g. year 1
    in a zone east of UTC). Such a bound is clamped to the first or last
    instant representable in UTC.

    Raises:
        ValueError: if ``year`` is outside the range ``datetime`` can represent.
    """
    start = datetime(year, 1, 1, tzinfo=tz)
    if year == datetime.max.year:
        end = datetime.max.replace(tzinfo=tz)
    else:
        end = datetime(year + 1, 1, 1, tzinfo=tz)
    return _clamp_to_utc_range(start), _clamp_to_utc_range(end)


def slugify(value: str) -> str:
    """
    Convert a brand name into a URL slug.

    Accents are stripped, anything that is not a letter or digit becomes a
    single hyphen, and the result is lowercased (``"Nike SB"`` -> ``"nike-sb"``).
    """
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
