from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from googleapiclient.discovery import Resource

from .config import Settings
from .models import HEADER, LogRow, SessionInput
from .resolver import format_stamp, local_now, resolve
from .sheets_client import append_row, ensure_tab_exists, get_last_row


logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    appended: bool
    row: LogRow | None = None
    created_tab: bool = False
    reason: str | None = None


def run_once(
    *,
    service: Resource,
    spreadsheet_id: str,
    session: SessionInput,
    settings: Settings,
    now: datetime | None = None,
    dry_run: bool = False,
) -> RunResult:
    """Append one log row for session to the sheet.

    Two invocations racing each other can both read the same last row; there
    is no check against that.
    """
    tz = settings.clock.tz
    now = now or local_now(tz)
    tab = settings.sheet.tab_name

    # An unusable clock must fail before anything is written.
    format_stamp(now, tz)

    created = ensure_tab_exists(service, spreadsheet_id=spreadsheet_id, tab_name=tab, header=HEADER)
    previous = None if created else get_last_row(service, spreadsheet_id=spreadsheet_id, tab_name=tab)

    row = resolve(
        previous,
        session,
        now,
        tz=tz,
        stale_after_hours=settings.clock.stale_after_hours,
        stale_minutes=settings.clock.stale_minutes,
    )
    if row is None:
        return RunResult(appended=False, created_tab=created, reason="empty log entry")

    if dry_run:
        return RunResult(appended=False, row=row, created_tab=created, reason="dry run")

    append_row(
        service,
        spreadsheet_id=spreadsheet_id,
        tab_name=tab,
        values=row.to_values(),
        value_input_option=settings.sheet.value_input_option,
    )
    logger.info("Appended row to %s: %s %s %s", tab, row.date, row.time, row.minutes_spent)
    return RunResult(appended=True, row=row, created_tab=created)
