from __future__ import annotations

import logging
from typing import Any, Sequence

from googleapiclient.discovery import Resource, build

from .models import HEADER, LogRow


logger = logging.getLogger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

_LAST_COLUMN = chr(ord("A") + len(HEADER) - 1)


def a1_range(tab_name: str, cells: str) -> str:
    # Quoted so tab names with spaces or quotes still parse.
    quoted = tab_name.replace("'", "''")
    return f"'{quoted}'!{cells}"


def build_sheets_service(creds) -> Resource:
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


def list_tab_titles(service: Resource, *, spreadsheet_id: str) -> list[str]:
    res = service.spreadsheets().get(
        spreadsheetId=spreadsheet_id,
        fields="sheets.properties.title",
    ).execute()
    return [s["properties"]["title"] for s in res.get("sheets", [])]


def append_row(
    service: Resource,
    *,
    spreadsheet_id: str,
    tab_name: str,
    values: Sequence[Any],
    value_input_option: str = "RAW",
) -> None:
    range_ = a1_range(tab_name, "A1")
    body = {"values": [list(values)]}
    service.spreadsheets().values().append(
        spreadsheetId=spreadsheet_id,
        range=range_,
        valueInputOption=value_input_option,
        insertDataOption="INSERT_ROWS",
        body=body,
    ).execute()


def ensure_tab_exists(
    service: Resource,
    *,
    spreadsheet_id: str,
    tab_name: str,
    header: Sequence[str] = HEADER,
) -> bool:
    """Create tab_name with its header row unless it is already there.

    Returns True when the tab was created.
    """
    if tab_name in list_tab_titles(service, spreadsheet_id=spreadsheet_id):
        return False

    logger.info("Creating tab %s in %s", tab_name, spreadsheet_id)
    service.spreadsheets().batchUpdate(
        spreadsheetId=spreadsheet_id,
        body={"requests": [{"addSheet": {"properties": {"title": tab_name}}}]},
    ).execute()
    append_row(service, spreadsheet_id=spreadsheet_id, tab_name=tab_name, values=header)
    return True


def get_last_row(service: Resource, *, spreadsheet_id: str, tab_name: str) -> LogRow | None:
    res = service.spreadsheets().values().get(
        spreadsheetId=spreadsheet_id,
        range=a1_range(tab_name, f"A1:{_LAST_COLUMN}"),
    ).execute()
    rows = res.get("values", []) or []
    # First row is the header.
    if len(rows) < 2:
        return None
    return LogRow.from_values(rows[-1])
