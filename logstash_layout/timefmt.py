"""ISO-8601 timestamp formatting for epoch milliseconds."""

_MILLIS_PER_DAY = 86_400_000


def _civil_from_days(days: int) -> tuple[int, int, int]:
    """Proleptic Gregorian (year, month, day) for a day count since 1970-01-01."""
    z = days + 719_468  # shift the epoch to 0000-03-01
    era = z // 146_097
    doe = z - era * 146_097
    yoe = (doe - doe // 1460 + doe // 36_524 - doe // 146_096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def format_timestamp(millis: int) -> str:
    """Format epoch milliseconds as ``yyyy-MM-ddTHH:mm:ss.SSSZ`` in UTC.

    Integer arithmetic only, so any int is accepted and the result never
    depends on float rounding, the local timezone or the locale. Years are
    padded to four digits; years before 0000 carry a leading ``-``.
    """
    days, rest = divmod(millis, _MILLIS_PER_DAY)
    seconds, ms = divmod(rest, 1000)
    hour, seconds = divmod(seconds, 3600)
    minute, second = divmod(seconds, 60)
    year, month, day = _civil_from_days(days)
    sign = "-" if year < 0 else ""
    return (f"{sign}{abs(year):04d}-{month:02d}-{day:02d}"
            f"T{hour:02d}:{minute:02d}:{second:02d}.{ms:03d}Z")
