"""Decide what row to append for one devlog invocation.

Everything here is pure: the previous row, the session arguments and the
current time go in, the row to append comes out. Reading and writing the
sheet lives in ``sheets_client``.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

from dateutil import parser as dtparser

from .errors import ClockParseError, MalformedRowError
from .models import (
    STOP,
    ContinuePrevious,
    Explicit,
    LogRow,
    SessionInput,
    Unspecified,
    context_of,
)


logger = logging.getLogger(__name__)

DEFAULT_TZ = ZoneInfo("Australia/Sydney")
STALE_AFTER_HOURS = 6
STALE_MINUTES = 10

_STAMP_FORMAT = "%a, %b %d, %Y %H:%M"


def local_now(tz: tzinfo = DEFAULT_TZ) -> datetime:
    return datetime.now(tz)


def _wall_time(now: datetime, tz: tzinfo) -> datetime:
    # Naive datetimes are already wall time in tz.
    if now.tzinfo is not None:
        now = now.astimezone(tz).replace(tzinfo=None)
    return now.replace(second=0, microsecond=0)


def format_stamp(now: datetime, tz: tzinfo = DEFAULT_TZ) -> tuple[str, str]:
    """Return the (date, time) cells for now, e.g. ("Mon, Jan 1, 2024", "09:05")."""
    if not isinstance(now, datetime):
        raise ClockParseError(f"Not a timestamp: {now!r}")
    wall = _wall_time(now, tz)
    date_s = f"{wall:%a, %b} {wall.day}, {wall:%Y}"
    time_s = f"{wall:%H:%M}"
    try:
        datetime.strptime(f"{date_s} {time_s}", _STAMP_FORMAT)
    except ValueError as e:
        raise ClockParseError(f"Error parsing current date and time: {date_s} {time_s}") from e
    return date_s, time_s


def row_timestamp(row: LogRow) -> datetime:
    """Parse a stored row's date and time cells into a naive wall time."""
    date_s, time_s = row.date.strip(), row.time.strip()
    if not date_s or not time_s:
        raise MalformedRowError(f"Row has no date/time: {row.date!r} {row.time!r}")
    stamp = f"{date_s} {time_s}"
    try:
        return datetime.strptime(stamp, _STAMP_FORMAT)
    except ValueError:
        pass
    # Rows edited by hand in the sheet may use some other date layout.
    try:
        return dtparser.parse(stamp).replace(tzinfo=None, second=0, microsecond=0)
    except (ValueError, OverflowError) as e:
        raise MalformedRowError(f"Unparseable row timestamp: {stamp!r}") from e


def elapsed_minutes(
    previous: LogRow,
    now: datetime,
    *,
    tz: tzinfo = DEFAULT_TZ,
    stale_after_hours: int = STALE_AFTER_HOURS,
    stale_minutes: int = STALE_MINUTES,
) -> int | None:
    """Minutes between the previous row and now, or None if the row is unreadable.

    A gap of more than ``stale_after_hours`` hours means the last session was
    never closed out, so ``stale_minutes`` is reported instead.
    """
    try:
        then = row_timestamp(previous)
    except MalformedRowError as e:
        logger.warning("Can't compute elapsed time: %s", e)
        return None

    delta = abs(_wall_time(now, tz) - then)
    minutes = delta.days * 24 * 60 + delta.seconds // 60
    if minutes // 60 > stale_after_hours:
        minutes = stale_minutes

    logger.info("Minutes since last log entry: %s", minutes)
    return minutes


def normalize_log_entry(text: str) -> str:
    # Callers join multi-line commit messages with "; ".
    return text.replace("; ", "\n")


def resolve(
    previous: LogRow | None,
    session: SessionInput,
    now: datetime,
    *,
    tz: tzinfo = DEFAULT_TZ,
    stale_after_hours: int = STALE_AFTER_HOURS,
    stale_minutes: int = STALE_MINUTES,
) -> LogRow | None:
    """Build the row to append, or None when there is nothing to log."""
    date_s, time_s = format_stamp(now, tz)

    if not (session.log_entry or "").strip():
        return None

    spec = session.minutes
    log_entry = session.log_entry
    context = {k: (v if v is not None else "") for k, v in session.context().items()}

    if previous is None:
        minutes = spec.value if isinstance(spec, Explicit) else None
    else:
        elapsed = elapsed_minutes(
            previous,
            now,
            tz=tz,
            stale_after_hours=stale_after_hours,
            stale_minutes=stale_minutes,
        )
        inherited = context_of(previous)
        context = {k: (v if v is not None else inherited[k]) for k, v in session.context().items()}

        if log_entry == STOP and previous.log_entry != STOP:
            context = inherited
            minutes = elapsed
        elif isinstance(spec, ContinuePrevious):
            context = inherited
            minutes = elapsed
        elif isinstance(spec, Unspecified):
            minutes = elapsed
        else:
            minutes = spec.value

    if not isinstance(minutes, int) or minutes < 0:
        minutes = None

    return LogRow(
        date=date_s,
        time=time_s,
        minutes_spent=minutes,
        log_entry=normalize_log_entry(log_entry),
        **context,
    )
